from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "~/.local/state/gnomp/gnomp.log"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging for one gnomp invocation.

    Progress goes to stdout and to a log file. If the requested log file
    cannot be opened, a ``gnomp.log`` in the working directory is used
    instead.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_gnomp_configured", False):
        return getattr(root, "_gnomp_log_path", log_path)

    requested = str(Path(log_path).expanduser())
    chosen_path = requested
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(requested).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(requested)
    except OSError:
        chosen_path = str(Path.cwd() / "gnomp.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter(fmt="%(levelname)s: %(message)s"))
        handlers.append(console)

    for h in handlers:
        setattr(h, "_gnomp_handler", True)
        root.addHandler(h)

    setattr(root, "_gnomp_configured", True)
    setattr(root, "_gnomp_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path


def reset_logging() -> None:
    """Detach handlers installed by configure_logging()."""

    root = logging.getLogger()
    if not getattr(root, "_gnomp_configured", False):
        return
    for h in list(root.handlers):
        if getattr(h, "_gnomp_handler", False):
            root.removeHandler(h)
            h.close()
    setattr(root, "_gnomp_configured", False)
