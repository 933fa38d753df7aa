"""Per-session pagination state for repeated page requests.

A cursor remembers the identity, occurrence and row of the last item handed out for a
query. When the same session asks for the next page of the same query, the
scan suppresses everything up to that item instead of counting rows from the
beginning again.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

LOGGER = logging.getLogger(__name__)

DEFAULT_SESSION = "default"


@dataclass(slots=True)
class PaginationCursor:
    query: Optional[str] = None
    last_id: Optional[str] = None
    last_ordinal: int = 0
    last_offset: int = -1

    def reset(self) -> None:
        self.last_id = None
        self.last_ordinal = 0
        self.last_offset = -1

    def sync(self, query: str) -> bool:
        """Adopt ``query``; returns True when the stored state was reset."""
        if query == self.query:
            return False
        self.query = query
        self.reset()
        return True

    def record(self, item_id: Optional[str], ordinal: int, row: int) -> None:
        """Remember the latest aggregated item.

        ``ordinal`` counts the occurrences of ``item_id`` in the scan up to and
        including this item, so repeated identities still pin one position.
        Items without an identity leave no resume boundary, so the next page
        falls back to plain row counting.
        """
        if item_id is None:
            self.reset()
            return
        self.last_id = item_id
        self.last_ordinal = ordinal
        self.last_offset = row

    def scan(self) -> "CursorScan":
        return CursorScan(self)


class CursorScan:
    """Row numbering for one pass over the candidate items.

    Every identity is counted over the whole stream, suppressed items
    included. The boundary is the ``last_ordinal``-th occurrence of
    ``last_id``; it keeps its old row and numbering continues after it.
    """

    def __init__(self, cursor: PaginationCursor) -> None:
        self.cursor = cursor
        self.boundary_id = cursor.last_id
        self.boundary_ordinal = cursor.last_ordinal
        self.crossed = cursor.last_id is None
        self.row = -1
        self.ordinal = 0
        self._seen: Counter[str] = Counter()
        self._pending: Optional[Tuple[Optional[str], int, int]] = None

    def advance(self, item_id: Optional[str]) -> Optional[int]:
        """Number the next item, or return None up to and including the boundary."""
        if item_id is not None:
            self._seen[item_id] += 1
            self.ordinal = self._seen[item_id]
        else:
            self.ordinal = 0
        if not self.crossed:
            if item_id == self.boundary_id and self.ordinal == self.boundary_ordinal:
                self.crossed = True
                self.row = self.cursor.last_offset
            return None
        self.row += 1
        return self.row

    def should_skip(self, item_id: Optional[str], start: int) -> bool:
        row = self.advance(item_id)
        return row is None or row < start

    def record(self, item_id: Optional[str]) -> None:
        self._pending = (item_id, self.ordinal, self.row)

    def commit(self) -> None:
        """Write the latest recorded item back to the cursor.

        A scan that fails part way never commits, leaving the cursor as it was.
        """
        if self._pending is not None:
            self.cursor.record(*self._pending)
            self._pending = None


class CursorRegistry:
    """Session id to cursor map; sessions never share state."""

    def __init__(self) -> None:
        self._cursors: Dict[str, PaginationCursor] = {}
        self._lock = threading.Lock()

    def cursor_for(self, session: str = DEFAULT_SESSION) -> PaginationCursor:
        with self._lock:
            cursor = self._cursors.get(session)
            if cursor is None:
                LOGGER.debug("Creating pagination cursor for session %s", session)
                cursor = self._cursors[session] = PaginationCursor()
            return cursor

    def peek(self, session: str = DEFAULT_SESSION) -> Optional[PaginationCursor]:
        return self._cursors.get(session)

    def discard(self, session: str) -> None:
        with self._lock:
            self._cursors.pop(session, None)

    def __len__(self) -> int:
        return len(self._cursors)
