from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import unquote

from .command import CommandError, run_cmd

logger = logging.getLogger(__name__)


def dconf_dump(namespace: str, dest: Path) -> None:
    r = run_cmd(["dconf", "dump", namespace])
    dest.write_text(r.stdout, encoding="utf-8")


def dconf_load(namespace: str, src: Path) -> None:
    run_cmd(["dconf", "load", namespace], input_text=src.read_text(encoding="utf-8"))


def gsettings_get(schema: str, key: str) -> str:
    return run_cmd(["gsettings", "get", schema, key]).stdout.strip()


def gsettings_set(schema: str, key: str, value: str) -> None:
    run_cmd(["gsettings", "set", schema, key, value])


def uri_to_path(value: str) -> Path | None:
    """Turn a GVariant string like ``'file:///a/b%20c.png'`` into a path."""

    text = value.strip().strip("'\"")
    if not text:
        return None
    if text.startswith("file://"):
        text = unquote(text[len("file://"):])
    elif "://" in text:
        return None
    return Path(text)


def current_wallpaper(schema: str, key: str) -> Path | None:
    try:
        raw = gsettings_get(schema, key)
    except CommandError as e:
        logger.debug("Cannot read %s %s: %s", schema, key, e)
        return None
    return uri_to_path(raw)
