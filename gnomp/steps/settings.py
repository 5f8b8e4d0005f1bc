from __future__ import annotations

import logging

from ..layout import SETTINGS_DUMPS
from ..lib.command import CommandError
from ..lib.dconf import dconf_dump, dconf_load
from ..pipeline import RunCtx
from ..report import RunReport, Status

logger = logging.getLogger(__name__)


class DumpSettingsStep:
    step_id = "10_dump_settings"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Dumping GNOME and extension settings...")
        for namespace, filename in SETTINGS_DUMPS:
            try:
                dconf_dump(namespace, ctx.workspace / filename)
            except (CommandError, OSError) as e:
                report.record(self.step_id, namespace, Status.FAILED, str(e))
                continue
            report.record(self.step_id, namespace, Status.SUCCEEDED, filename)


class LoadSettingsStep:
    step_id = "10_load_settings"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Restoring GNOME settings...")
        for namespace, filename in SETTINGS_DUMPS:
            src = ctx.workspace / filename
            if not src.is_file():
                report.record(self.step_id, namespace, Status.SKIPPED_ABSENT, f"{filename} not in archive")
                continue
            try:
                dconf_load(namespace, src)
            except (CommandError, OSError) as e:
                report.record(self.step_id, namespace, Status.FAILED, str(e))
                continue
            report.record(self.step_id, namespace, Status.SUCCEEDED, filename)
