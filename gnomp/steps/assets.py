from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from ..layout import SYSTEM_ASSETS, USER_ASSETS, AssetSpec
from ..lib.assets import copy_tree, current_owner
from ..lib.command import CommandError
from ..pipeline import RunCtx
from ..report import RunReport, Status

logger = logging.getLogger(__name__)


def _copy_each(
    step_id: str,
    report: RunReport,
    pairs: Sequence[tuple[AssetSpec, Path, Path]],
    *,
    privilege_prefix: Sequence[str] = (),
    chown_to: str | None = None,
) -> None:
    for asset, src, dst in pairs:
        try:
            copied = copy_tree(src, dst, privilege_prefix=privilege_prefix, chown_to=chown_to)
        except (CommandError, OSError) as e:
            report.record(step_id, asset.name, Status.FAILED, str(e))
            continue
        if copied:
            report.record(step_id, asset.name, Status.SUCCEEDED, f"{src} -> {dst}")
        else:
            report.record(step_id, asset.name, Status.SKIPPED_ABSENT, f"{src} does not exist")


class CollectUserAssetsStep:
    step_id = "30_collect_user_assets"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Backing up user customizations (themes, icons, fonts)...")
        pairs = [(s, ctx.home / s.source, ctx.workspace / s.entry) for s in USER_ASSETS]
        _copy_each(self.step_id, report, pairs)


class RestoreUserAssetsStep:
    step_id = "30_restore_user_assets"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Restoring user customizations (themes, icons, fonts)...")
        pairs = [(s, ctx.workspace / s.entry, ctx.home / s.source) for s in USER_ASSETS]
        _copy_each(self.step_id, report, pairs)


class CollectSystemAssetsStep:
    step_id = "50_collect_system_assets"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Backing up system-wide resources and login screen theme (may ask for sudo)...")
        pairs = [(s, ctx.system_share / s.source, ctx.workspace / s.entry) for s in SYSTEM_ASSETS]
        prefix = ctx.privilege_prefix
        # Hand copies back to us so the workspace can be archived and removed.
        _copy_each(
            self.step_id,
            report,
            pairs,
            privilege_prefix=prefix,
            chown_to=current_owner() if prefix else None,
        )


class RestoreSystemAssetsStep:
    step_id = "50_restore_system_assets"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Restoring system-wide resources and login screen theme (may ask for sudo)...")
        pairs = [(s, ctx.workspace / s.entry, ctx.system_share / s.source) for s in SYSTEM_ASSETS]
        _copy_each(self.step_id, report, pairs, privilege_prefix=ctx.privilege_prefix)
