"""Text helpers for query and attribute values."""

from __future__ import annotations

import re
from typing import Iterable

_NON_DIGITS = re.compile(r"[^\d]")


def join_values(values: Iterable[str]) -> str:
    """Join a multi-valued attribute into a single comma separated string."""
    return ",".join(values).strip()


def digits_only(text: str) -> str:
    """Drop every character that is not a decimal digit."""
    return _NON_DIGITS.sub("", text)
