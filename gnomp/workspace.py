from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from .lib.command import run_cmd

logger = logging.getLogger(__name__)


@contextmanager
def scoped_workspace(
    work_root: Path | None = None,
    *,
    privilege_prefix: Sequence[str] = (),
) -> Iterator[Path]:
    """Yield a fresh working directory, removed on every exit path."""

    if work_root is not None:
        work_root.mkdir(parents=True, exist_ok=True)
    path = Path(tempfile.mkdtemp(prefix="gnomp-", dir=str(work_root) if work_root else None))
    logger.debug("Workspace %s", path)
    try:
        yield path
    finally:
        remove_workspace(path, privilege_prefix=privilege_prefix)


def remove_workspace(path: Path, *, privilege_prefix: Sequence[str] = ()) -> None:
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        if not privilege_prefix:
            raise
        # Root-owned leftovers from a privileged copy.
        logger.warning("Removing workspace %s needs privilege: %s", path, e)
        run_cmd([*privilege_prefix, "rm", "-rf", str(path)])
