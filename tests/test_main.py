from __future__ import annotations

import pytest
import yaml

from gnomp.main import USAGE, main


def _write_config(tmp_path, monkeypatch, raw):
    path = tmp_path / "gnomp.yaml"
    path.write_text(yaml.safe_dump(raw), encoding="utf-8")
    monkeypatch.setenv("GNOMP_CONFIG", str(path))


def _no_input(prompt):
    raise AssertionError("should not prompt")


@pytest.mark.parametrize(
    "argv",
    [[], ["frobnicate"], ["--help"], ["Backup"], ["--help", "backup"], ["-x", "restore"], ["", "verify"]],
)
def test_unrecognized_command_prints_usage_and_exits_1(argv, desktop, capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GNOMP_CONFIG", str(tmp_path / "missing.yaml"))

    assert main(argv, input_fn=_no_input) == 1

    out = capsys.readouterr().out
    assert out.strip() == USAGE
    assert "backup|restore|verify" in out
    assert desktop.calls == []
    assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize("command", ["backup", "restore"])
def test_missing_dependency_stops_before_any_side_effect(command, desktop, capsys, tmp_path, monkeypatch, raw_config):
    raw_config["dependencies"] = ["dconf", "no-such-tool", "also-missing"]
    _write_config(tmp_path, monkeypatch, raw_config)
    monkeypatch.setattr(
        "gnomp.lib.deps.shutil.which",
        lambda name: None if name in {"no-such-tool", "also-missing"} else f"/usr/bin/{name}",
    )

    assert main([command], input_fn=_no_input) == 1

    out = capsys.readouterr().out
    assert "Missing dependency: no-such-tool" in out
    assert "Missing dependency: also-missing" in out
    assert desktop.calls == []
    assert not (tmp_path / "archives").exists()


def test_verify_does_not_check_dependencies(desktop, capsys, tmp_path, monkeypatch, raw_config):
    raw_config["dependencies"] = ["no-such-tool"]
    _write_config(tmp_path, monkeypatch, raw_config)

    def _which(name):
        raise AssertionError("verify must not probe dependencies")

    monkeypatch.setattr("gnomp.lib.deps.shutil.which", _which)

    assert main(["verify"], input_fn=lambda prompt: str(tmp_path / "nope.tar.gz")) == 1
    assert "Archive file not found" in capsys.readouterr().out
    assert desktop.tools("tar") == []


@pytest.mark.parametrize("command", ["restore", "verify"])
def test_nonexistent_archive_exits_1_without_extracting(command, desktop, capsys, tmp_path, monkeypatch, config_file):
    monkeypatch.setattr("gnomp.lib.deps.shutil.which", lambda name: f"/usr/bin/{name}")

    rc = main([command], input_fn=lambda prompt: str(tmp_path / "does-not-exist.tar.gz"))

    assert rc == 1
    assert "Archive file not found" in capsys.readouterr().out
    assert desktop.tools("tar") == []


def test_backup_command_end_to_end(desktop, tmp_path, monkeypatch, config_file):
    monkeypatch.setattr("gnomp.lib.deps.shutil.which", lambda name: f"/usr/bin/{name}")

    assert main(["backup"], input_fn=_no_input) == 0

    archives = list((tmp_path / "archives").glob("gnome-setup-*.tar.gz"))
    assert len(archives) == 1
    assert (tmp_path / "state" / "last-backup.json").exists()


@pytest.mark.parametrize("command", ["restore", "verify"])
def test_closed_stdin_at_prompt_exits_1(command, desktop, capsys, monkeypatch, config_file):
    monkeypatch.setattr("gnomp.lib.deps.shutil.which", lambda name: f"/usr/bin/{name}")

    def _eof(prompt):
        raise EOFError

    assert main([command], input_fn=_eof) == 1
    assert "Archive file not found: <empty>" in capsys.readouterr().out
    assert desktop.tools("tar") == []
