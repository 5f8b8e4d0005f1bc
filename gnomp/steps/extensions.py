from __future__ import annotations

import logging
from typing import Optional

from ..errors import ExtensionLookupError, MissingDownloadUrl
from ..layout import EXTENSIONS_LIST
from ..lib.command import CommandError
from ..lib.extensions import (
    enable_extension,
    is_installed,
    list_extensions,
    read_extension_list,
    shell_version,
    unpack_extension,
)
from ..pipeline import RunCtx
from ..report import RunReport, Status

logger = logging.getLogger(__name__)


class ListExtensionsStep:
    step_id = "20_list_extensions"

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Saving list of installed extensions...")
        try:
            uuids = list_extensions()
            (ctx.workspace / EXTENSIONS_LIST).write_text(
                "".join(f"{u}\n" for u in uuids), encoding="utf-8"
            )
        except (CommandError, OSError) as e:
            report.record(self.step_id, EXTENSIONS_LIST, Status.FAILED, str(e))
            return
        report.record(self.step_id, EXTENSIONS_LIST, Status.SUCCEEDED, f"{len(uuids)} extensions")


class ReconcileExtensionsStep:
    """Install extensions missing locally, then enable every listed one."""

    step_id = "70_reconcile_extensions"

    def __init__(self) -> None:
        self._shell_version: Optional[str] = None

    def _version(self, ctx: RunCtx) -> Optional[str]:
        if self._shell_version is None:
            self._shell_version = ctx.cfg.shell_version or shell_version()
        return self._shell_version

    def _install(self, ctx: RunCtx, report: RunReport, uuid: str) -> None:
        logger.info("Installing missing extension: %s", uuid)
        version = self._version(ctx)
        if not version:
            report.record(self.step_id, uuid, Status.FAILED, "cannot determine GNOME Shell version")
            return
        if ctx.index is None:
            report.record(self.step_id, uuid, Status.FAILED, "no extension index configured")
            return
        try:
            info = ctx.index.lookup(uuid, version)
            zip_path = ctx.index.download(info, ctx.workspace / "downloads" / f"{uuid}.zip")
            unpack_extension(zip_path, ctx.cfg.user_extensions_dir / uuid)
        except MissingDownloadUrl as e:
            logger.warning("Failed to find download URL for %s", uuid)
            report.record(self.step_id, uuid, Status.FAILED, str(e))
            return
        except (ExtensionLookupError, CommandError, OSError) as e:
            report.record(self.step_id, uuid, Status.FAILED, str(e))
            return
        logger.info("Extension %s installed successfully.", uuid)
        report.record(self.step_id, uuid, Status.SUCCEEDED, f"installed {info.download_url}")

    def run(self, ctx: RunCtx, report: RunReport) -> None:
        logger.info("Attempting automatic reinstallation of online extensions...")
        src = ctx.workspace / EXTENSIONS_LIST
        if not src.is_file():
            report.record(self.step_id, EXTENSIONS_LIST, Status.SKIPPED_ABSENT, "not in archive")
            return

        for uuid in read_extension_list(src):
            if not is_installed(uuid):
                self._install(ctx, report, uuid)
            if enable_extension(uuid):
                report.record(self.step_id, f"enable {uuid}", Status.SUCCEEDED)
            else:
                report.record(self.step_id, f"enable {uuid}", Status.FAILED, "gnome-extensions enable failed")
