"""Free-text search over issue records."""

from __future__ import annotations

from typing import Any

from sieve.core import fields


def tokens(query: str) -> list[str]:
    """Lower-case a query and split it on whitespace runs."""
    return query.strip().lower().split()


def searchable_text(record: Any) -> str:
    """Title, body, author login and label names, joined and lower-cased."""
    parts = [
        fields.title(record),
        fields.body(record),
        fields.author_login(record),
        *fields.label_names(record),
    ]
    return " ".join(parts).lower()


def _contains_all(record: Any, terms: list[str]) -> bool:
    text = searchable_text(record)
    return all(t in text for t in terms)


def matches_query(record: Any, query: str) -> bool:
    """True when every query token occurs in the record's searchable text."""
    return _contains_all(record, tokens(query))


def filter_by_text(records: list[Any], query: str) -> tuple[list[Any], list[str]]:
    """Return the records matching a query along with its tokens."""
    terms = tokens(query)
    if not terms:
        return list(records), []
    return [r for r in records if _contains_all(r, terms)], terms
