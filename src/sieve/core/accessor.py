"""Dot-path field resolution for records (e.g. 'user.login')."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class _NotFound:
    """Marker for a path that does not resolve. Distinct from ``None``."""

    _instance: _NotFound | None = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self):
        return (_NotFound, ())


NOT_FOUND: Any = _NotFound()


def is_missing(value: Any) -> bool:
    return value is NOT_FOUND


def is_null(value: Any) -> bool:
    """Missing, or present and ``None``."""
    return value is NOT_FOUND or value is None


def get_field(record: Any, path: str) -> Any:
    """Resolve a dotted path against a record.

    Each segment must name a key of a mapping (or an attribute of an object,
    such as a pydantic model). Returns ``NOT_FOUND`` as soon as a segment is
    missing; a terminal ``None`` is returned as ``None``.
    """
    current = record
    for part in path.split("."):
        if current is None:
            return NOT_FOUND
        if isinstance(current, Mapping):
            if part not in current:
                return NOT_FOUND
            current = current[part]
        elif isinstance(current, (str, bytes, int, float, bool, list, tuple)):
            return NOT_FOUND
        elif hasattr(current, part) and not part.startswith("_"):
            current = getattr(current, part)
        else:
            return NOT_FOUND
    return current
