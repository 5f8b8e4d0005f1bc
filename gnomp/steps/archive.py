from __future__ import annotations

import logging
from typing import Dict

from ..layout import REQUIRED_ENTRIES
from ..lib.archive import create_archive, extract_archive, list_archive, verify_entries
from ..lib.command import CommandError
from ..pipeline import RunCtx
from ..report import RunReport, Status

logger = logging.getLogger(__name__)


class ExtractArchiveStep:
    step_id = "05_extract_archive"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        if ctx.archive is None:
            raise RuntimeError("ExtractArchiveStep needs ctx.archive")
        logger.info("Extracting %s", ctx.archive)
        try:
            extract_archive(ctx.archive, ctx.workspace)
        except (CommandError, OSError) as e:
            report.record(self.step_id, str(ctx.archive), Status.FAILED, str(e))
            return
        report.record(self.step_id, str(ctx.archive), Status.SUCCEEDED)


class CreateArchiveStep:
    step_id = "90_create_archive"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        if ctx.archive is None:
            raise RuntimeError("CreateArchiveStep needs ctx.archive")
        logger.info("Creating compressed backup archive...")
        try:
            create_archive(ctx.workspace, ctx.archive)
        except (CommandError, OSError) as e:
            report.record(self.step_id, str(ctx.archive), Status.FAILED, str(e))
            return
        report.record(self.step_id, str(ctx.archive), Status.SUCCEEDED)


class VerifyArchiveStep:
    """Check the archive listing for the entries a restore depends on."""

    step_id = "10_verify_entries"

    def __init__(self, results: Dict[str, bool]) -> None:
        self.results = results

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        if ctx.archive is None:
            raise RuntimeError("VerifyArchiveStep needs ctx.archive")
        listing = ctx.workspace / "backup_contents.txt"
        try:
            list_archive(ctx.archive, listing)
        except (CommandError, OSError) as e:
            report.record(self.step_id, str(ctx.archive), Status.FAILED, str(e))
        for name, present in verify_entries(listing, REQUIRED_ENTRIES).items():
            self.results[name] = present
            if present:
                logger.info("File present: %s", name)
                report.record(self.step_id, name, Status.SUCCEEDED)
            else:
                logger.warning("Critical file missing: %s", name)
                report.record(self.step_id, name, Status.SKIPPED_ABSENT, "missing from archive")
