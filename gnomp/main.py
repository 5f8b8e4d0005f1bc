from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, Optional

from .config import SnapshotConfig, load_config, resolve_config_path
from .errors import PreconditionError
from .lib.deps import check_dependencies
from .logging_utils import configure_logging
from .workflows import InputFn, run_backup, run_restore, run_verify

logger = logging.getLogger(__name__)

USAGE = "Usage: gnomp [backup|restore|verify]"


def _backup(cfg: SnapshotConfig, input_fn: InputFn) -> None:
    check_dependencies(cfg.dependencies)
    run_backup(cfg)


def _restore(cfg: SnapshotConfig, input_fn: InputFn) -> None:
    check_dependencies(cfg.dependencies)
    run_restore(cfg, input_fn=input_fn)


def _verify(cfg: SnapshotConfig, input_fn: InputFn) -> None:
    run_verify(cfg, input_fn=input_fn)


COMMANDS: Dict[str, Callable[[SnapshotConfig, InputFn], None]] = {
    "backup": _backup,
    "restore": _restore,
    "verify": _verify,
}


def main(argv: Optional[list[str]] = None, *, input_fn: InputFn = input) -> int:
    # Only the first token selects a command; anything after it is ignored.
    tokens = list(sys.argv[1:] if argv is None else argv)
    handler = COMMANDS.get(tokens[0] if tokens else "")
    if handler is None:
        print(USAGE)
        return 1

    cfg = load_config(resolve_config_path())
    configure_logging(log_path=cfg.log_path, level=cfg.log_level)

    try:
        handler(cfg, input_fn)
    except PreconditionError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
