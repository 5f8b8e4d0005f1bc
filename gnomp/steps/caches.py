from __future__ import annotations

import logging

from ..lib.command import run_cmd
from ..pipeline import RunCtx
from ..report import RunReport, Status

logger = logging.getLogger(__name__)


class RefreshCachesStep:
    step_id = "80_refresh_caches"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Refreshing font cache and desktop entry database...")
        for item, argv in (
            ("font cache", ["fc-cache", "-rv"]),
            ("desktop database", [*ctx.privilege_prefix, "update-desktop-database"]),
        ):
            r = run_cmd(argv, check=False)
            if r.ok:
                report.record(self.step_id, item, Status.SUCCEEDED)
            else:
                report.record(self.step_id, item, Status.FAILED, r.stderr.strip() or f"exit {r.returncode}")
