"""Loading of record folders from their ``order.xml`` marker file.

Expected layout::

    <order>
      <stack>
        <process>
          <index name="status"><value>OPEN</value></index>
          <document>
            <index name="doc_type"><value>INVOICE</value></index>
          </document>
        </process>
      </stack>
    </order>

``<process>`` elements may also sit directly under the root element.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Protocol

from folderquery.errors import LoadError
from folderquery.models import AttributeMap, Item, Record, Unit

LOGGER = logging.getLogger(__name__)

DEFAULT_MARKER = "order.xml"
DEFAULT_PATH_FIELD = "pi_path_to_order_xml"


class RecordLoader(Protocol):
    def load(self, folder: Path) -> Record:
        ...


def read_attributes(element: ET.Element) -> AttributeMap:
    """Collect the ``<index>`` children of an element into an attribute map."""
    attributes: AttributeMap = {}
    for index in element.findall("index"):
        name = index.get("name")
        if not name:
            continue
        values = [value.text or "" for value in index.findall("value")]
        attributes.setdefault(name, []).extend(values)
    return attributes


def iter_process_elements(root: ET.Element) -> Iterable[ET.Element]:
    stack = root.find("stack")
    parent = stack if stack is not None else root
    return parent.findall("process")


class XmlRecordLoader:
    """Build :class:`Record` objects from a folder's XML marker file."""

    def __init__(
        self,
        *,
        marker_name: str = DEFAULT_MARKER,
        path_field: str = DEFAULT_PATH_FIELD,
    ) -> None:
        self.marker_name = marker_name
        self.path_field = path_field

    def load(self, folder: Path) -> Record:
        marker = folder / self.marker_name
        LOGGER.debug("Loading record: %s", folder)
        try:
            tree = ET.parse(marker)
        except FileNotFoundError as exc:
            raise LoadError(folder, f"missing {self.marker_name}") from exc
        except ET.ParseError as exc:
            raise LoadError(folder, f"corrupt {self.marker_name}: {exc}") from exc
        except OSError as exc:
            raise LoadError(folder, str(exc)) from exc

        source = str(folder.absolute())
        units = []
        for process in iter_process_elements(tree.getroot()):
            attributes = read_attributes(process)
            attributes[self.path_field] = [source]
            items = [Item(read_attributes(document)) for document in process.findall("document")]
            units.append(Unit(attributes=attributes, items=items))
        return Record(folder=folder, units=units)
