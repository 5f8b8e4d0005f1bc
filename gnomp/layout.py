"""Names inside a gnomp archive and where each entry comes from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

GNOME_NAMESPACE = "/org/gnome/"
EXTENSIONS_NAMESPACE = "/org/gnome/shell/extensions/"

GNOME_DUMP = "dconf-gnome.conf"
EXTENSIONS_DUMP = "dconf-extensions.conf"
EXTENSIONS_LIST = "extensions-list.txt"
WALLPAPER = "wallpaper.png"

BACKGROUND_SCHEMA = "org.gnome.desktop.background"
WALLPAPER_KEYS = ("picture-uri", "picture-uri-dark")
RESTORED_WALLPAPER_NAME = "gnomp-wallpaper.png"

# namespace -> dump file
SETTINGS_DUMPS: Tuple[Tuple[str, str], ...] = (
    (GNOME_NAMESPACE, GNOME_DUMP),
    (EXTENSIONS_NAMESPACE, EXTENSIONS_DUMP),
)

# Entries the verifier treats as critical.
REQUIRED_ENTRIES: Tuple[str, ...] = (GNOME_DUMP, EXTENSIONS_LIST, WALLPAPER)


@dataclass(frozen=True)
class AssetSpec:
    name: str
    source: str  # relative to home (user) or system share (system)
    entry: str  # relative to the workspace


USER_ASSETS: Tuple[AssetSpec, ...] = (
    AssetSpec("themes", ".themes", ".themes"),
    AssetSpec("icons", ".icons", ".icons"),
    AssetSpec("fonts", ".local/share/fonts", "fonts"),
)

SYSTEM_ASSETS: Tuple[AssetSpec, ...] = (
    AssetSpec("system themes", "themes", "usr_themes"),
    AssetSpec("system icons", "icons", "usr_icons"),
    AssetSpec("system fonts", "fonts", "usr_fonts"),
    AssetSpec("system extensions", "gnome-shell/extensions", "usr_extensions"),
    AssetSpec("login screen theme", "gnome-shell/theme", "gdm-theme"),
)
