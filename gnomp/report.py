from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class Status(str, Enum):
    SUCCEEDED = "succeeded"
    SKIPPED_ABSENT = "skipped_absent"
    FAILED = "failed"


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    item: str
    status: Status
    detail: str = ""


@dataclass
class RunReport:
    """Everything that happened during one backup/restore/verify run."""

    command: str
    archive: Optional[str] = None
    outcomes: List[StepOutcome] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def record(self, step_id: str, item: str, status: Status, detail: str = "") -> StepOutcome:
        outcome = StepOutcome(step_id=step_id, item=item, status=status, detail=detail)
        self.outcomes.append(outcome)
        if status is Status.FAILED:
            logger.warning("%s: %s failed: %s", step_id, item, detail or "unknown error")
        elif status is Status.SKIPPED_ABSENT:
            logger.debug("%s: %s skipped (%s)", step_id, item, detail or "absent")
        return outcome

    def with_status(self, status: Status) -> List[StepOutcome]:
        return [o for o in self.outcomes if o.status is status]

    def counts(self) -> Dict[str, int]:
        counts = {s.value: 0 for s in Status}
        for o in self.outcomes:
            counts[o.status.value] += 1
        return counts

    def as_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "archive": self.archive,
            "counts": self.counts(),
            "outcomes": [
                {"step": o.step_id, "item": o.item, "status": o.status.value, "detail": o.detail}
                for o in self.outcomes
            ],
            "errors": list(self.errors),
        }


def log_report(report: RunReport) -> None:
    counts = report.counts()
    logger.info(
        "Run summary (%s): %d succeeded, %d skipped, %d failed",
        report.command,
        counts[Status.SUCCEEDED.value],
        counts[Status.SKIPPED_ABSENT.value],
        counts[Status.FAILED.value],
    )
    for o in report.with_status(Status.FAILED):
        logger.info("  failed  [%s] %s: %s", o.step_id, o.item, o.detail)
    for o in report.with_status(Status.SKIPPED_ABSENT):
        logger.info("  skipped [%s] %s", o.step_id, o.item)
