from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .config import SnapshotConfig
from .errors import PreconditionError
from .lib.ego import ExtensionIndex, HttpExtensionIndex
from .pipeline import RunCtx, Step, run_pipeline
from .report import RunReport, log_report
from .report_store import save_report
from .steps import (
    ApplyWallpaperStep,
    CollectSystemAssetsStep,
    CollectUserAssetsStep,
    CollectWallpaperStep,
    CreateArchiveStep,
    DumpSettingsStep,
    ExtractArchiveStep,
    ListExtensionsStep,
    LoadSettingsStep,
    ReconcileExtensionsStep,
    RefreshCachesStep,
    RestoreSystemAssetsStep,
    RestoreUserAssetsStep,
    VerifyArchiveStep,
)
from .workspace import scoped_workspace

logger = logging.getLogger(__name__)

ARCHIVE_PROMPT = "Enter path to your backup archive (.tar.gz): "

InputFn = Callable[[str], str]


def backup_steps() -> List[Step]:
    return [
        DumpSettingsStep(),
        ListExtensionsStep(),
        CollectUserAssetsStep(),
        CollectWallpaperStep(),
        CollectSystemAssetsStep(),
        CreateArchiveStep(),
    ]


def restore_steps() -> List[Step]:
    return [
        ExtractArchiveStep(),
        LoadSettingsStep(),
        RestoreUserAssetsStep(),
        ApplyWallpaperStep(),
        RestoreSystemAssetsStep(),
        ReconcileExtensionsStep(),
        RefreshCachesStep(),
    ]


def prompt_archive_path(input_fn: InputFn = input) -> Path:
    try:
        raw = input_fn(ARCHIVE_PROMPT).strip()
    except EOFError:
        raw = ""
    path = Path(raw).expanduser() if raw else None
    if path is None or not path.is_file():
        raise PreconditionError(f"Archive file not found: {raw or '<empty>'}")
    return path


def _execute(
    cfg: SnapshotConfig,
    report: RunReport,
    steps: Sequence[Step],
    *,
    archive: Optional[Path],
    index: Optional[ExtensionIndex] = None,
) -> RunReport:
    """Run steps in a fresh workspace, persisting the report on every exit path."""

    try:
        with scoped_workspace(cfg.work_root, privilege_prefix=cfg.privilege_prefix) as ws:
            ctx = RunCtx(cfg=cfg, workspace=ws, archive=archive, index=index)
            run_pipeline(ctx=ctx, steps=steps, report=report)
        return report
    except Exception as e:
        logger.exception("%s failed", report.command)
        report.errors.append({"error": str(e)})
        raise
    finally:
        log_report(report)
        report_path = cfg.report_path(report.command)
        try:
            save_report(report_path, report)
        except OSError as e:
            logger.warning("Could not write run report %s: %s", report_path, e)


def run_backup(cfg: SnapshotConfig, *, today: Optional[date] = None) -> RunReport:
    logger.info("Initiating GNOME environment backup...")
    archive = cfg.archive_path(today)
    report = RunReport(command="backup", archive=str(archive))
    _execute(cfg, report, backup_steps(), archive=archive)
    logger.info("Backup procedure finished.")
    logger.info("Archive location: %s", archive)
    return report


def run_restore(
    cfg: SnapshotConfig,
    *,
    input_fn: InputFn = input,
    index: Optional[ExtensionIndex] = None,
) -> RunReport:
    archive = prompt_archive_path(input_fn)
    logger.info("Initiating GNOME environment restore from %s...", archive)
    if index is None:
        index = HttpExtensionIndex(cfg.extensions_site, timeout=cfg.http_timeout)
    report = RunReport(command="restore", archive=str(archive))
    _execute(cfg, report, restore_steps(), archive=archive, index=index)
    logger.info("Restore procedure finished. Log out or run 'Alt+F2' then 'r' to reload GNOME Shell.")
    return report


def run_verify(cfg: SnapshotConfig, *, input_fn: InputFn = input) -> Dict[str, bool]:
    logger.info("Initiating backup integrity verification...")
    archive = prompt_archive_path(input_fn)
    results: Dict[str, bool] = {}
    report = RunReport(command="verify", archive=str(archive))
    _execute(cfg, report, [VerifyArchiveStep(results)], archive=archive)
    logger.info("Verification complete.")
    return results
