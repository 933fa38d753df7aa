"""Boolean query language parsing and evaluation.

A query is a conjunction of clauses separated by ``AND``; each clause is a
disjunction of ``field:value`` terms separated by ``OR``. Both keywords are
case-insensitive and must be surrounded by whitespace, so ``AND`` always binds
outermost. A field prefixed with ``-`` or ``NOT `` negates its term, and values
may carry leading and/or trailing ``*`` wildcards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Sequence, Tuple

from folderquery.errors import QueryFormatError

_AND_SPLIT = re.compile(r"\s+AND\s+", re.IGNORECASE)
_OR_SPLIT = re.compile(r"\s+OR\s+", re.IGNORECASE)
_NEGATION_PREFIXES = ("-", "NOT ")

Attributes = Mapping[str, Sequence[str]]


def match_term(pattern: str, actual: str | None) -> bool:
    """Match a single attribute value against a term pattern.

    ``None`` never matches, whatever the term's negation.
    """
    if actual is None:
        return False
    core = pattern.replace("*", "")
    if pattern.startswith("*") and pattern.endswith("*"):
        return core in actual
    if pattern.endswith("*"):
        return actual.startswith(core)
    if pattern.startswith("*"):
        return actual.endswith(core)
    return actual == pattern


@dataclass(frozen=True, slots=True)
class Term:
    field: str
    value: str
    negated: bool = False

    def matches(self, values: Sequence[str | None]) -> bool:
        found = any(match_term(self.value, actual) for actual in values)
        return found != self.negated


@dataclass(frozen=True, slots=True)
class Clause:
    """OR-joined terms."""

    terms: Tuple[Term, ...]

    def evaluate(self, attributes: Attributes) -> bool:
        satisfied = False
        for term in self.terms:
            # An absent field ends the clause; it counts as neither match nor miss.
            if term.field not in attributes:
                break
            satisfied |= term.matches(attributes[term.field])
        return satisfied


@dataclass(frozen=True, slots=True)
class Query:
    """AND-joined clauses."""

    text: str
    clauses: Tuple[Clause, ...]

    def evaluate(self, attributes: Attributes) -> bool:
        for clause in self.clauses:
            if not clause.evaluate(attributes):
                return False
        return True


def parse_term(text: str, query: str) -> Term:
    """Split ``field:value``; text after a second ``:`` is not part of the value."""
    parts = text.split(":")
    if len(parts) < 2:
        raise QueryFormatError(query, f"Term {text!r} lacks a ':' separator")
    field, value = parts[0], parts[1]
    negated = False
    for prefix in _NEGATION_PREFIXES:
        if field.startswith(prefix):
            field = field[len(prefix):]
            negated = True
            break
    return Term(field=field, value=value, negated=negated)


@lru_cache(maxsize=256)
def parse_query(query: str) -> Query:
    """Parse a query string, raising :class:`QueryFormatError` on malformed terms."""
    text = query.strip()
    if not text:
        raise QueryFormatError(query, "Empty query")
    clauses = tuple(
        Clause(tuple(parse_term(term, query) for term in _OR_SPLIT.split(part)))
        for part in _AND_SPLIT.split(text)
    )
    return Query(text=query, clauses=clauses)


def evaluate(query: str, attributes: Attributes) -> bool:
    """Evaluate ``query`` against a field to values mapping."""
    return parse_query(query).evaluate(attributes)
