from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV = "GNOMP_CONFIG"
DEFAULT_CONFIG_PATH = "~/.config/gnomp/config.yaml"

DEFAULT_DEPENDENCIES = [
    "dconf",
    "gsettings",
    "tar",
    "gnome-extensions",
    "unzip",
    "sudo",
    "fc-cache",
]


def _expand(value: Any) -> Path:
    return Path(str(value)).expanduser()


@dataclass(frozen=True)
class SnapshotConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def home(self) -> Path:
        value = self._section("paths").get("home")
        return _expand(value) if value else Path.home()

    @property
    def system_share(self) -> Path:
        return _expand(self._section("paths").get("system_share") or "/usr/share")

    @property
    def archive_dir(self) -> Path:
        value = self._section("paths").get("archive_dir")
        return _expand(value) if value else self.home

    @property
    def work_root(self) -> Optional[Path]:
        value = self._section("paths").get("work_root")
        return _expand(value) if value else None

    @property
    def state_dir(self) -> Path:
        value = self._section("paths").get("state_dir")
        return _expand(value) if value else self.home / ".local/state/gnomp"

    @property
    def wallpaper_dir(self) -> Path:
        value = self._section("paths").get("wallpaper_dir")
        return _expand(value) if value else self.home / ".local/share/backgrounds"

    @property
    def user_extensions_dir(self) -> Path:
        return self.home / ".local/share/gnome-shell/extensions"

    @property
    def archive_name_template(self) -> str:
        return str(self._section("archive").get("name_template") or "gnome-setup-{date}.tar.gz")

    @property
    def archive_date_format(self) -> str:
        return str(self._section("archive").get("date_format") or "%Y%m%d")

    @property
    def dependencies(self) -> List[str]:
        deps = self.raw.get("dependencies")
        if deps is None:
            return list(DEFAULT_DEPENDENCIES)
        return [str(d) for d in deps]

    @property
    def privilege_prefix(self) -> List[str]:
        """Command prefix for system-wide copies; empty when already root."""
        if os.geteuid() == 0:
            return []
        prefix = self.raw.get("privilege_command")
        if prefix is None:
            return ["sudo"]
        if isinstance(prefix, str):
            return prefix.split()
        return [str(p) for p in prefix]

    @property
    def extensions_site(self) -> str:
        return str(self._section("extensions").get("site") or "https://extensions.gnome.org").rstrip("/")

    @property
    def shell_version(self) -> Optional[str]:
        value = self._section("extensions").get("shell_version")
        return str(value) if value else None

    @property
    def http_timeout(self) -> float:
        return float(self._section("extensions").get("timeout") or 30)

    @property
    def log_path(self) -> str:
        value = self._section("logging").get("path")
        return str(_expand(value)) if value else str(self.state_dir / "gnomp.log")

    @property
    def log_level(self) -> int:
        name = str(self._section("logging").get("level") or "INFO").upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    @property
    def report_format(self) -> str:
        fmt = str(self._section("report").get("format") or "json").lower()
        return fmt if fmt in {"json", "yaml", "yml"} else "json"

    def report_path(self, command: str) -> Path:
        return self.state_dir / f"last-{command}.{self.report_format}"

    def archive_path(self, today: Optional[date] = None) -> Path:
        """First unused archive path for today's date."""
        stamp = (today or date.today()).strftime(self.archive_date_format)
        candidate = self.archive_dir / self.archive_name_template.format(date=stamp)
        name = candidate.name
        if name.endswith(".tar.gz"):
            stem, suffix = name[: -len(".tar.gz")], ".tar.gz"
        else:
            stem, suffix = candidate.stem, candidate.suffix
        n = 1
        while candidate.exists():
            candidate = candidate.with_name(f"{stem}-{n}{suffix}")
            n += 1
        return candidate


def resolve_config_path() -> Optional[str]:
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return env_path
    default = Path(DEFAULT_CONFIG_PATH).expanduser()
    return str(default) if default.exists() else None


def load_config(path: Optional[str]) -> SnapshotConfig:
    if path is None:
        return SnapshotConfig()

    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("gnomp config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the gnomp config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping/object")

    return SnapshotConfig(raw=raw)
