from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def current_owner() -> str:
    return f"{os.getuid()}:{os.getgid()}"


def copy_tree(
    src: Path,
    dst: Path,
    *,
    privilege_prefix: Sequence[str] = (),
    chown_to: str | None = None,
) -> bool:
    """Merge the contents of ``src`` into ``dst``.

    Returns False (and does nothing) when ``src`` is not a directory.
    With a privilege prefix the copy runs through ``cp`` under that prefix;
    ``chown_to`` then hands the copied tree back to that owner.
    Raises OSError or CommandError on failure.
    """

    if not src.is_dir():
        return False

    if privilege_prefix:
        prefix = list(privilege_prefix)
        run_cmd([*prefix, "mkdir", "-p", str(dst)])
        run_cmd([*prefix, "cp", "-r", f"{src}/.", str(dst)])
        if chown_to:
            run_cmd([*prefix, "chown", "-R", chown_to, str(dst)])
        return True

    shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)
    return True


def copy_file(src: Path, dst: Path) -> bool:
    if not src.is_file():
        return False
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
    return True
