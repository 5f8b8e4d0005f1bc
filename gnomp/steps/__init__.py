from .archive import CreateArchiveStep, ExtractArchiveStep, VerifyArchiveStep
from .assets import (
    CollectSystemAssetsStep,
    CollectUserAssetsStep,
    RestoreSystemAssetsStep,
    RestoreUserAssetsStep,
)
from .caches import RefreshCachesStep
from .extensions import ListExtensionsStep, ReconcileExtensionsStep
from .settings import DumpSettingsStep, LoadSettingsStep
from .wallpaper import ApplyWallpaperStep, CollectWallpaperStep

__all__ = [
    "DumpSettingsStep",
    "ListExtensionsStep",
    "CollectUserAssetsStep",
    "CollectWallpaperStep",
    "CollectSystemAssetsStep",
    "CreateArchiveStep",
    "ExtractArchiveStep",
    "LoadSettingsStep",
    "RestoreUserAssetsStep",
    "ApplyWallpaperStep",
    "RestoreSystemAssetsStep",
    "ReconcileExtensionsStep",
    "RefreshCachesStep",
    "VerifyArchiveStep",
]
