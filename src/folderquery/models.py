"""Core folderquery data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List

AttributeMap = Dict[str, List[str]]


@dataclass(slots=True)
class Item:
    """Leaf searchable entity of a record."""

    attributes: AttributeMap = field(default_factory=dict)


@dataclass(slots=True)
class Unit:
    """Grouping of items sharing a set of attributes."""

    attributes: AttributeMap = field(default_factory=dict)
    items: List[Item] = field(default_factory=list)


@dataclass(slots=True)
class Record:
    """Deserialized content of one corpus folder."""

    folder: Path
    units: List[Unit] = field(default_factory=list)

    def iter_items(self) -> Iterator[tuple[Unit, Item]]:
        """Yield every item with its unit, preserving nested order."""
        for unit in self.units:
            for item in unit.items:
                yield unit, item


class EffectiveAttributes(Mapping):
    """Read-only view layering an item's attributes over its unit's.

    Lookups check the item map first and fall back to the unit map. Keys are
    iterated unit first, then the keys only the item defines.
    """

    __slots__ = ("_unit", "_item")

    def __init__(self, unit: AttributeMap, item: AttributeMap) -> None:
        self._unit = unit
        self._item = item

    def __getitem__(self, key: str) -> List[str]:
        if key in self._item:
            return self._item[key]
        return self._unit[key]

    def __contains__(self, key: object) -> bool:
        return key in self._item or key in self._unit

    def __iter__(self) -> Iterator[str]:
        yield from self._unit
        for key in self._item:
            if key not in self._unit:
                yield key

    def __len__(self) -> int:
        return len(self._unit) + sum(1 for key in self._item if key not in self._unit)

    def __repr__(self) -> str:
        return f"EffectiveAttributes({dict(self)!r})"

    @classmethod
    def of(cls, unit: Unit, item: Item) -> "EffectiveAttributes":
        return cls(unit.attributes, item.attributes)
