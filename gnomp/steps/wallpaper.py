from __future__ import annotations

import logging

from ..layout import BACKGROUND_SCHEMA, RESTORED_WALLPAPER_NAME, WALLPAPER, WALLPAPER_KEYS
from ..lib.assets import copy_file
from ..lib.command import CommandError
from ..lib.dconf import current_wallpaper, gsettings_set
from ..pipeline import RunCtx
from ..report import RunReport, Status

logger = logging.getLogger(__name__)


class CollectWallpaperStep:
    step_id = "40_collect_wallpaper"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Backing up current wallpaper...")
        src = current_wallpaper(BACKGROUND_SCHEMA, WALLPAPER_KEYS[0])
        if src is None:
            report.record(self.step_id, WALLPAPER, Status.SKIPPED_ABSENT, "no local wallpaper set")
            return
        try:
            copied = copy_file(src, ctx.workspace / WALLPAPER)
        except OSError as e:
            report.record(self.step_id, WALLPAPER, Status.FAILED, str(e))
            return
        if copied:
            report.record(self.step_id, WALLPAPER, Status.SUCCEEDED, str(src))
        else:
            report.record(self.step_id, WALLPAPER, Status.SKIPPED_ABSENT, f"{src} does not exist")


class ApplyWallpaperStep:
    step_id = "40_apply_wallpaper"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Restoring wallpaper settings...")
        src = ctx.workspace / WALLPAPER
        if not src.is_file():
            report.record(self.step_id, WALLPAPER, Status.SKIPPED_ABSENT, "not in archive")
            return

        # The workspace is removed after the run; keep the image somewhere stable.
        dest = ctx.cfg.wallpaper_dir / RESTORED_WALLPAPER_NAME
        try:
            copy_file(src, dest)
            uri = dest.resolve().as_uri()
            for key in reversed(WALLPAPER_KEYS):
                gsettings_set(BACKGROUND_SCHEMA, key, uri)
        except (CommandError, OSError) as e:
            report.record(self.step_id, WALLPAPER, Status.FAILED, str(e))
            return
        report.record(self.step_id, WALLPAPER, Status.SUCCEEDED, str(dest))
