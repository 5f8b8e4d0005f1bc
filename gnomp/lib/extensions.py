from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?")


def list_extensions() -> List[str]:
    r = run_cmd(["gnome-extensions", "list"])
    return [line.strip() for line in r.stdout.splitlines() if line.strip()]


def is_installed(uuid: str) -> bool:
    return run_cmd(["gnome-extensions", "info", uuid], check=False).ok


def enable_extension(uuid: str) -> bool:
    return run_cmd(["gnome-extensions", "enable", uuid], check=False).ok


def parse_shell_version(text: str) -> str | None:
    """``GNOME Shell 47.2`` -> ``47.2``; ``GNOME Shell 48`` -> ``48``."""

    m = _VERSION_RE.search(text)
    if not m:
        return None
    major, minor = m.group(1), m.group(2)
    return f"{major}.{minor}" if minor is not None else major


def shell_version() -> str | None:
    r = run_cmd(["gnome-shell", "--version"], check=False)
    if not r.ok:
        return None
    return parse_shell_version(r.stdout)


def unpack_extension(zip_path: Path, dest: Path) -> None:
    dest.mkdir(parents=True, exist_ok=True)
    run_cmd(["unzip", "-oq", str(zip_path), "-d", str(dest)])


def read_extension_list(path: Path) -> List[str]:
    """Identifiers in file order, blank lines skipped."""

    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
