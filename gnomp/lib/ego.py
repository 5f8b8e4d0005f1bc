"""Client for the extensions.gnome.org metadata endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol
from urllib.parse import urljoin

import requests

from ..errors import ExtensionLookupError, MissingDownloadUrl

logger = logging.getLogger(__name__)

USER_AGENT = "gnomp/0.1"


@dataclass(frozen=True)
class ExtensionInfo:
    uuid: str
    download_url: str
    name: Optional[str] = None
    version: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Any, *, uuid: str, shell_version: str, site: str) -> "ExtensionInfo":
        if not isinstance(payload, dict):
            raise ExtensionLookupError(f"Unexpected metadata payload for {uuid}: {type(payload).__name__}")
        url = payload.get("download_url")
        if not isinstance(url, str) or not url.strip():
            raise MissingDownloadUrl(uuid, shell_version)
        version = payload.get("version")
        return cls(
            uuid=str(payload.get("uuid") or uuid),
            download_url=urljoin(site + "/", url.strip()),
            name=payload.get("name"),
            version=version if isinstance(version, int) else None,
        )


class ExtensionIndex(Protocol):
    def lookup(self, uuid: str, shell_version: str) -> ExtensionInfo:
        ...

    def download(self, info: ExtensionInfo, dest: Path) -> Path:
        ...


class HttpExtensionIndex:
    def __init__(
        self,
        site: str = "https://extensions.gnome.org",
        *,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.site = site.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def lookup(self, uuid: str, shell_version: str) -> ExtensionInfo:
        params: Dict[str, str] = {"uuid": uuid, "shell_version": shell_version}
        try:
            response = self.session.get(f"{self.site}/extension-info/", params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ExtensionLookupError(f"Metadata request for {uuid} failed: {exc}") from exc
        if response.status_code == 404:
            raise MissingDownloadUrl(uuid, shell_version)
        if response.status_code >= 300:
            raise ExtensionLookupError(f"Metadata request for {uuid} returned HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ExtensionLookupError(f"Metadata for {uuid} was not JSON") from exc
        return ExtensionInfo.from_payload(payload, uuid=uuid, shell_version=shell_version, site=self.site)

    def download(self, info: ExtensionInfo, dest: Path) -> Path:
        dest.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.session.get(info.download_url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with dest.open("wb") as fh:
                    for chunk in response.iter_content(chunk_size=65536):
                        if chunk:
                            fh.write(chunk)
        except requests.RequestException as exc:
            raise ExtensionLookupError(f"Download of {info.uuid} failed: {exc}") from exc
        logger.debug("Downloaded %s -> %s", info.download_url, dest)
        return dest
