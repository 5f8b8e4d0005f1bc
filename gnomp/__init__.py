"""gnomp: GNOME desktop snapshot backup/restore.

Core design goals:
- Best-effort, independent steps
- Fresh workspace per run
- Explicit per-run outcome report
- Centralized logging
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
