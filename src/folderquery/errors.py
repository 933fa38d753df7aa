"""Exceptions raised by the query engine."""

from __future__ import annotations

from pathlib import Path


class FolderQueryError(Exception):
    """Base class for all folderquery errors."""


class QueryFormatError(FolderQueryError):
    """The query string cannot be parsed or lacks its date-bearing clause."""

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"{reason}: {query!r}")
        self.query = query
        self.reason = reason


class LoadError(FolderQueryError):
    """A record folder could not be read or deserialized."""

    def __init__(self, folder: Path, reason: str) -> None:
        super().__init__(f"Failed to load record from {folder}: {reason}")
        self.folder = folder


class ConfigurationError(FolderQueryError):
    """The corpus root is missing or is not a directory.

    Raised while listing the root; the snapshot logs it and serves empty
    results.
    """
