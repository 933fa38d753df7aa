"""Corpus snapshot and candidate folder selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

from folderquery.errors import ConfigurationError, QueryFormatError
from folderquery.utils.files import has_marker, iter_prefixed, list_folders
from folderquery.utils.text import digits_only

LOGGER = logging.getLogger(__name__)

DATE_TOKEN = "_id_str"


def extract_date_filter(query: str) -> str:
    """Derive the numeric folder prefix from the query's ``*_id_str`` clause.

    ``"pi_order_id_str:20230102 AND status:OPEN"`` yields ``"20230102"``.
    """
    _, sep, tail = query.partition(DATE_TOKEN)
    if not sep:
        raise QueryFormatError(query, f"Query has no {DATE_TOKEN} clause")
    tokens = tail.replace(":", " ").split(" ")
    if len(tokens) < 2:
        raise QueryFormatError(query, f"No value follows {DATE_TOKEN}")
    return digits_only(tokens[1])


@dataclass(frozen=True, slots=True)
class CorpusSnapshot:
    """Folder listing captured once and never refreshed."""

    root: Path
    folders: Tuple[Path, ...] = ()

    @classmethod
    def from_root(cls, root: Path) -> "CorpusSnapshot":
        """List ``root`` once; a bad root is logged and gives an empty snapshot."""
        LOGGER.debug("Caching list of folders in %s", root)
        try:
            folders = list_folders(root)
        except ConfigurationError as exc:
            LOGGER.warning("%s; serving empty results", exc)
            folders = []
        return cls(root=root, folders=tuple(folders))

    def __len__(self) -> int:
        return len(self.folders)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.folders)


class CorpusScanner:
    """Narrows the snapshot down to folders that may hold matches."""

    def __init__(
        self,
        snapshot: CorpusSnapshot,
        *,
        folder_prefix: str = "order",
        marker_name: str = "order.xml",
    ) -> None:
        self.snapshot = snapshot
        self.folder_prefix = folder_prefix
        self.marker_name = marker_name

    def candidates(self, query: str) -> List[Path]:
        date_filter = extract_date_filter(query)
        return list(iter_prefixed(self.snapshot, (self.folder_prefix, date_filter)))

    def has_marker(self, folder: Path) -> bool:
        return has_marker(folder, self.marker_name)

    def iter_loadable(self, folders: Sequence[Path]) -> Iterator[Path]:
        """Yield folders carrying a marker file; others are skipped silently."""
        for folder in folders:
            if self.has_marker(folder):
                yield folder
            else:
                LOGGER.debug("Skipping %s: no %s", folder, self.marker_name)
