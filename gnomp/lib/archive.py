from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable

from .command import run_cmd

logger = logging.getLogger(__name__)


def create_archive(source_dir: Path, archive: Path) -> Path:
    archive.parent.mkdir(parents=True, exist_ok=True)
    run_cmd(["tar", "-czf", str(archive), "-C", str(source_dir), "."])
    return archive


def extract_archive(archive: Path, dest_dir: Path) -> None:
    dest_dir.mkdir(parents=True, exist_ok=True)
    run_cmd(["tar", "-xzf", str(archive), "-C", str(dest_dir)])


def list_archive(archive: Path, listing: Path) -> None:
    """Write the archive's entry names to ``listing``."""

    r = run_cmd(["tar", "-tzf", str(archive)])
    listing.parent.mkdir(parents=True, exist_ok=True)
    listing.write_text(r.stdout, encoding="utf-8")


def verify_entries(listing: Path, required: Iterable[str]) -> Dict[str, bool]:
    """Substring match of each required name against the whole listing."""

    text = listing.read_text(encoding="utf-8") if listing.exists() else ""
    return {name: name in text for name in required}
