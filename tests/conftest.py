"""Shared fixtures for building on-disk corpora."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple
from xml.sax.saxutils import escape

import pytest

Attrs = Dict[str, List[str]]
ProcessSpec = Tuple[Attrs, Sequence[Attrs]]


def _index_xml(attributes: Attrs) -> str:
    parts = []
    for name, values in attributes.items():
        inner = "".join(f"<value>{escape(value)}</value>" for value in values)
        parts.append(f'<index name="{escape(name)}">{inner}</index>')
    return "".join(parts)


def write_order(folder: Path, processes: Sequence[ProcessSpec], *, stacked: bool = True) -> Path:
    """Write an order.xml with one <process> per (unit attrs, [item attrs]) pair."""
    folder.mkdir(parents=True, exist_ok=True)
    body = ""
    for unit_attrs, items in processes:
        documents = "".join(f"<document>{_index_xml(item)}</document>" for item in items)
        body += f"<process>{_index_xml(unit_attrs)}{documents}</process>"
    if stacked:
        body = f"<stack>{body}</stack>"
    (folder / "order.xml").write_text(f"<order>{body}</order>", encoding="utf-8")
    return folder


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """Three order folders of four items each, all with status OPEN."""
    root = tmp_path / "orders"
    root.mkdir()
    for name in ("20230101a", "20230101b", "20230101c"):
        write_order(
            root / name,
            [
                (
                    {"pi_order_id_str": [name], "status": ["OPEN"]},
                    [{"doc_id": [f"{name}-{index}"]} for index in range(4)],
                )
            ],
        )
    return root


@pytest.fixture(name="write_order")
def write_order_fixture():
    return write_order
