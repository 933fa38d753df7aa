"""Accumulation of matched attributes into a flat multi-valued mapping."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from folderquery.utils.text import join_values


class ResultAccumulator:
    """Collects one joined value per field for every matched item, in scan order."""

    def __init__(self) -> None:
        self._fields: Dict[str, List[str]] = {}
        self.matched = 0

    def add(self, attributes: Mapping[str, Sequence[str]]) -> None:
        for name in attributes:
            self._fields.setdefault(name, []).append(join_values(attributes[name]))
        self.matched += 1

    def result(self) -> Dict[str, List[str]]:
        return self._fields

    def __len__(self) -> int:
        return self.matched
