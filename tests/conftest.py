from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest
import yaml

from gnomp.config import SnapshotConfig
from gnomp.logging_utils import reset_logging

REAL_RUN = subprocess.run

# Tools the fake hands to the real system.
PASSTHROUGH = {"tar", "cp", "mkdir", "chown", "rm"}


class FakeDesktop:
    """Stands in for dconf, gsettings, gnome-extensions and friends."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.dconf: Dict[str, str] = {
            "/org/gnome/": "[desktop/interface]\ngtk-theme='Adwaita-dark'\n",
            "/org/gnome/shell/extensions/": "[dash-to-dock]\ndock-position='BOTTOM'\n",
        }
        self.loaded: Dict[str, str] = {}
        self.gsettings: Dict[tuple, str] = {}
        self.installed: List[str] = ["dash-to-dock@micxgx.gmail.com"]
        self.known: Optional[Set[str]] = None
        self.enabled: List[str] = []
        self.shell_version = "GNOME Shell 47.2"
        self.failing: Set[str] = set()

    def tools(self, name: str) -> List[List[str]]:
        return [c for c in self.calls if c and c[0] == name]

    def run(self, argv, input=None, text=True, stdout=None, stderr=None, cwd=None, env=None, **kwargs):
        argv = [str(a) for a in argv]
        if argv and argv[0] == "sudo":
            self.calls.append(argv)
            return self.run(argv[1:], input=input, text=text, stdout=stdout, stderr=stderr, cwd=cwd, env=env)
        if argv and argv[0] in PASSTHROUGH:
            self.calls.append(argv)
            return REAL_RUN(argv, input=input, text=text, stdout=stdout, stderr=stderr, cwd=cwd, env=env)
        self.calls.append(argv)
        prog = argv[0]
        if prog in self.failing:
            return subprocess.CompletedProcess(argv, 1, "", f"{prog}: simulated failure")
        handler = getattr(self, "_" + prog.replace("-", "_"), None)
        if handler is None:
            raise FileNotFoundError(2, "No such file or directory", prog)
        rc, out = handler(argv[1:], input)
        return subprocess.CompletedProcess(argv, rc, out, "")

    def _dconf(self, args, input_text):
        verb, namespace = args[0], args[1]
        if verb == "dump":
            return 0, self.dconf.get(namespace, "")
        self.loaded[namespace] = input_text or ""
        return 0, ""

    def _gsettings(self, args, input_text):
        if args[0] == "get":
            return 0, self.gsettings.get((args[1], args[2]), "''") + "\n"
        self.gsettings[(args[1], args[2])] = args[3]
        return 0, ""

    def _gnome_extensions(self, args, input_text):
        verb = args[0]
        if verb == "list":
            return 0, "".join(f"{u}\n" for u in self.installed)
        known = self.known if self.known is not None else set(self.installed)
        if verb == "info":
            return (0, args[1]) if args[1] in known else (1, "")
        if verb == "enable":
            self.enabled.append(args[1])
            return (0, "") if args[1] in known else (1, "")
        return 2, ""

    def _gnome_shell(self, args, input_text):
        return 0, self.shell_version + "\n"

    def _fc_cache(self, args, input_text):
        return 0, ""

    def _update_desktop_database(self, args, input_text):
        return 0, ""

    def _unzip(self, args, input_text):
        zip_path, dest = args[1], args[args.index("-d") + 1]
        with zipfile.ZipFile(zip_path) as zf:
            zf.extractall(dest)
        return 0, ""


@pytest.fixture
def desktop(monkeypatch) -> FakeDesktop:
    fake = FakeDesktop()
    monkeypatch.setattr("gnomp.lib.command.subprocess.run", fake.run)
    return fake


@pytest.fixture(autouse=True)
def _isolated_logging():
    yield
    reset_logging()


def make_raw_config(root: Path) -> dict:
    return {
        "paths": {
            "home": str(root / "home"),
            "system_share": str(root / "usr_share"),
            "archive_dir": str(root / "archives"),
            "work_root": str(root / "work"),
            "state_dir": str(root / "state"),
        },
        "dependencies": ["dconf"],
        "privilege_command": [],
        "extensions": {"site": "https://ego.test"},
    }


@pytest.fixture
def raw_config(tmp_path) -> dict:
    raw = make_raw_config(tmp_path)
    (tmp_path / "home").mkdir()
    return raw


@pytest.fixture
def cfg(raw_config) -> SnapshotConfig:
    return SnapshotConfig(raw=raw_config)


@pytest.fixture
def config_file(tmp_path, raw_config, monkeypatch) -> Path:
    path = tmp_path / "gnomp.yaml"
    path.write_text(yaml.safe_dump(raw_config), encoding="utf-8")
    monkeypatch.setenv("GNOMP_CONFIG", str(path))
    return path


def populate_desktop(cfg: SnapshotConfig, desktop: FakeDesktop) -> Path:
    """Give the fake user themes, fonts, a wallpaper and system assets."""

    home = cfg.home
    (home / ".themes/Nordic/gtk-3.0").mkdir(parents=True)
    (home / ".themes/Nordic/gtk-3.0/gtk.css").write_text("window {}\n")
    (home / ".local/share/fonts").mkdir(parents=True)
    (home / ".local/share/fonts/Inter.ttf").write_bytes(b"\x00\x01font")
    wallpaper = home / "Pictures/my wall.jpg"
    wallpaper.parent.mkdir(parents=True)
    wallpaper.write_bytes(b"JPEGDATA")
    desktop.gsettings[("org.gnome.desktop.background", "picture-uri")] = (
        "'file://" + str(wallpaper).replace(" ", "%20") + "'"
    )
    share = cfg.system_share
    (share / "themes/Yaru").mkdir(parents=True)
    (share / "themes/Yaru/index.theme").write_text("[Desktop Entry]\n")
    (share / "gnome-shell/theme").mkdir(parents=True)
    (share / "gnome-shell/theme/gdm.css").write_text("#lockDialogGroup {}\n")
    return wallpaper
