from __future__ import annotations

import tarfile

from gnomp.main import main
from gnomp.workflows import run_verify


def _make_archive(tmp_path, names):
    src = tmp_path / "src"
    src.mkdir()
    archive = tmp_path / "backup.tar.gz"
    with tarfile.open(archive, "w:gz") as tf:
        for name in names:
            (src / name).write_text("x")
            tf.add(src / name, arcname=f"./{name}")
    return archive


def test_verify_reports_each_required_file_independently(cfg, desktop, tmp_path):
    archive = _make_archive(tmp_path, ["dconf-gnome.conf", "wallpaper.png"])

    results = run_verify(cfg, input_fn=lambda prompt: str(archive))

    assert results == {
        "dconf-gnome.conf": True,
        "extensions-list.txt": False,
        "wallpaper.png": True,
    }
    assert list(cfg.work_root.iterdir()) == []


def test_verify_never_fails_the_process(desktop, capsys, tmp_path, config_file):
    archive = _make_archive(tmp_path, ["dconf-extensions.conf"])

    assert main(["verify"], input_fn=lambda prompt: str(archive)) == 0

    out = capsys.readouterr().out
    assert "Critical file missing: dconf-gnome.conf" in out
    assert "Critical file missing: extensions-list.txt" in out
    assert "Critical file missing: wallpaper.png" in out
    assert "Verification complete." in out


def test_verify_unreadable_archive_reports_everything_missing(cfg, desktop, tmp_path):
    bogus = tmp_path / "bogus.tar.gz"
    bogus.write_text("definitely not gzip")

    results = run_verify(cfg, input_fn=lambda prompt: str(bogus))

    assert results == {name: False for name in ("dconf-gnome.conf", "extensions-list.txt", "wallpaper.png")}
