"""Paginated boolean search over the record folders of a corpus."""

from __future__ import annotations

import logging
import sys
import uuid
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Protocol, Sequence

from folderquery.config import AppConfig
from folderquery.engine.aggregator import ResultAccumulator
from folderquery.engine.cursor import DEFAULT_SESSION, CursorRegistry
from folderquery.engine.scanner import CorpusScanner, CorpusSnapshot
from folderquery.ingestion.xml_loader import RecordLoader, XmlRecordLoader
from folderquery.models import EffectiveAttributes
from folderquery.query.parser import parse_query
from folderquery.utils.text import join_values

LOGGER = logging.getLogger(__name__)

ResultMapping = Dict[str, List[str]]


class CountClient(Protocol):
    def count(self, query: str) -> int:
        ...


class FolderSearcher:
    """High-level API answering queries by scanning record folders."""

    def __init__(
        self,
        scanner: CorpusScanner,
        loader: RecordLoader,
        *,
        identity_field: str = "pi_order_id_str",
        count_client: Optional[CountClient] = None,
        registry: Optional[CursorRegistry] = None,
    ) -> None:
        self.scanner = scanner
        self.loader = loader
        self.identity_field = identity_field
        self.count_client = count_client
        self.registry = registry if registry is not None else CursorRegistry()

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        count_client: Optional[CountClient] = None,
        loader: Optional[RecordLoader] = None,
    ) -> "FolderSearcher":
        snapshot = CorpusSnapshot.from_root(config.resolve_corpus_root())
        scanner = CorpusScanner(
            snapshot,
            folder_prefix=config.folder_prefix,
            marker_name=config.marker_name,
        )
        if loader is None:
            loader = XmlRecordLoader(marker_name=config.marker_name, path_field=config.path_field)
        return cls(
            scanner,
            loader,
            identity_field=config.identity_field,
            count_client=count_client,
        )

    def search(
        self,
        query: str,
        start: int = 0,
        rows: int = 10,
        *,
        session: str = DEFAULT_SESSION,
    ) -> ResultMapping:
        LOGGER.debug("GET %s&start=%s&rows=%s", query, start, rows)
        parsed = parse_query(query)
        folders = self.scanner.candidates(query)
        if not folders or rows <= 0:
            return {}

        cursor = self.registry.cursor_for(session)
        if cursor.sync(query):
            LOGGER.debug("New query for session %s, cursor reset", session)
        scan = cursor.scan()
        results = ResultAccumulator()

        for attributes in self._iter_items(folders):
            item_id = self._identity(attributes)
            if scan.should_skip(item_id, start):
                continue
            if not parsed.evaluate(attributes):
                continue
            results.add(attributes)
            scan.record(item_id)
            if len(results) >= rows:
                break
        scan.commit()
        return results.result()

    def count(self, query: str) -> int:
        if self.count_client is not None:
            return self.count_client.count(query)

        LOGGER.warning("No count client configured - COUNT falls back to a full scan")
        session = f"count-{uuid.uuid4().hex}"
        try:
            result = self.search(query, 0, sys.maxsize, session=session)
        finally:
            self.registry.discard(session)
        # Length of the first field only; sparse fields can make this inexact.
        for values in result.values():
            return len(values)
        return 0

    def _iter_items(self, folders: Sequence[Path]) -> Iterator[EffectiveAttributes]:
        """Load candidate records lazily and yield each item's attribute view."""
        for folder in self.scanner.iter_loadable(folders):
            record = self.loader.load(folder)
            for unit, item in record.iter_items():
                yield EffectiveAttributes.of(unit, item)

    def _identity(self, attributes: EffectiveAttributes) -> Optional[str]:
        if self.identity_field not in attributes:
            return None
        return join_values(attributes[self.identity_field])
