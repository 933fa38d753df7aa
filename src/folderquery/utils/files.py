"""Utility helpers for working with corpus folders."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from folderquery.errors import ConfigurationError


def list_folders(root: Path) -> list[Path]:
    """Return the direct child folders of ``root`` sorted by name.

    Raises:
        ConfigurationError: If ``root`` is missing or is not a directory.
    """
    if not root.is_dir():
        raise ConfigurationError(f"Corpus root {root} does not exist or is not a directory")
    return sorted((child for child in root.iterdir() if child.is_dir()), key=lambda p: p.name)


def iter_prefixed(folders: Iterable[Path], prefixes: Iterable[str]) -> Iterator[Path]:
    """Yield folders whose name starts with any of the given prefixes."""
    wanted = tuple(prefixes)
    for folder in folders:
        if folder.name.startswith(wanted):
            yield folder


def has_marker(folder: Path, marker_name: str) -> bool:
    """Check whether a folder carries its record marker file."""
    return (folder / marker_name).is_file()
