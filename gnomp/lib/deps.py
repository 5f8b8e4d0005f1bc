from __future__ import annotations

import logging
import shutil
from typing import Iterable, List

from ..errors import PreconditionError

logger = logging.getLogger(__name__)

INSTALL_HINT = "sudo dnf install gnome-extensions-app unzip"


def missing_commands(names: Iterable[str]) -> List[str]:
    return [n for n in names if shutil.which(n) is None]


def check_dependencies(names: Iterable[str]) -> None:
    """Fail fast if any required executable is absent.

    Every missing name is reported before raising, not just the first.
    """

    names = list(names)
    logger.info("Checking essential dependencies...")
    missing = missing_commands(names)
    for name in missing:
        logger.error("Missing dependency: %s", name)
    if missing:
        raise PreconditionError(
            "Critical dependencies are missing: "
            + ", ".join(missing)
            + f". Install them and run again (e.g. {INSTALL_HINT})."
        )
    logger.info("All required dependencies are present.")
