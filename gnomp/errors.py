from __future__ import annotations


class GnompError(Exception):
    pass


class PreconditionError(GnompError):
    """The run cannot start (missing tool, missing archive)."""


class ExtensionLookupError(GnompError):
    pass


class MissingDownloadUrl(ExtensionLookupError):
    def __init__(self, uuid: str, shell_version: str) -> None:
        super().__init__(f"No download_url for {uuid} (shell {shell_version})")
        self.uuid = uuid
        self.shell_version = shell_version
