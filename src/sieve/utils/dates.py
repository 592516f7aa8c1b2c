"""ISO-8601 timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes so aware and naive values compare."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_instant(value: Any) -> datetime | None:
    """Parse an ISO timestamp (e.g. '2026-02-23T14:30:00Z') into an aware datetime.

    Returns None for anything that is not a datetime or an ISO-8601 string.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    # gh and the REST API both use a trailing 'Z'
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None
