from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from .config import SnapshotConfig
from .lib.ego import ExtensionIndex
from .report import RunReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunCtx:
    cfg: SnapshotConfig
    workspace: Path
    archive: Optional[Path] = None
    index: Optional[ExtensionIndex] = None

    @property
    def home(self) -> Path:
        return self.cfg.home

    @property
    def system_share(self) -> Path:
        return self.cfg.system_share

    @property
    def privilege_prefix(self) -> List[str]:
        return self.cfg.privilege_prefix


class Step(Protocol):
    """A single best-effort step."""

    step_id: str

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        ...


def run_pipeline(*, ctx: RunCtx, steps: Sequence[Step], report: RunReport) -> None:
    """Run steps in order. Steps record their own outcomes in the report."""

    for step in steps:
        logger.info("Running step %s", step.step_id)
        step.run(ctx, report)
