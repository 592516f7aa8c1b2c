"""Record ordering: issue sort keys (created, updated, number, priority)
and generic multi-key sorting over field paths.

All sorts are stable: records that compare equal keep their input order
in both directions.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import cmp_to_key
from typing import Any, Optional, TypeVar

from sieve.core import fields
from sieve.core.accessor import get_field, is_null
from sieve.core.schema import ClassificationOverride, Priority, SortKey
from sieve.utils.dates import EPOCH_MIN, parse_instant

T = TypeVar("T")

# Higher = more urgent. Backlog sorts alongside low.
PRIORITY_RANK: dict[str, int] = {
    Priority.critical.value: 4,
    Priority.high.value: 3,
    Priority.medium.value: 2,
    Priority.low.value: 1,
    Priority.backlog.value: 1,
}

# Label conventions checked in precedence order
_PRIORITY_LABELS: tuple[tuple[str, int], ...] = (
    ("priority: critical", 4),
    ("priority: high", 3),
    ("priority: medium", 2),
    ("priority: low", 1),
)

Overrides = Mapping[int, ClassificationOverride]


def label_priority(record: Any) -> int:
    """Infer priority from 'priority: <level>' labels, 0 when none match."""
    names = {n.lower() for n in fields.label_names(record)}
    for label, rank in _PRIORITY_LABELS:
        if label in names:
            return rank
    return 0


def _override_rank(override: Any) -> int | None:
    priority = override.priority if hasattr(override, "priority") else override.get("priority")
    if priority is None:
        return None
    key = priority.value if isinstance(priority, Priority) else str(priority).lower()
    return PRIORITY_RANK.get(key, 0)


def resolve_priority(record: Any, overrides: Optional[Overrides] = None) -> int:
    """Priority from the override map when it has the record, else from labels."""
    if overrides:
        override = overrides.get(fields.record_number(record))
        if override is not None:
            rank = _override_rank(override)
            if rank is not None:
                return rank
    return label_priority(record)


def _instant(record: Any, path: str):
    return parse_instant(get_field(record, path)) or EPOCH_MIN


def _number(record: Any) -> float:
    number = fields.record_number(record)
    if isinstance(number, bool) or not isinstance(number, (int, float)):
        return 0
    return number


def _sign(a: Any, b: Any) -> int:
    return 1 if a > b else -1 if a < b else 0


def compare_records(
    a: Any,
    b: Any,
    sort_by: str,
    sort_order: str = "asc",
    overrides: Optional[Overrides] = None,
) -> int:
    """Compare two records by an issue sort key, returning -1, 0 or 1."""
    if sort_by == "created":
        result = _sign(_instant(a, "created_at"), _instant(b, "created_at"))
    elif sort_by == "updated":
        result = _sign(_instant(a, "updated_at"), _instant(b, "updated_at"))
    elif sort_by == "number":
        result = _sign(_number(a), _number(b))
    elif sort_by == "priority":
        result = _sign(resolve_priority(a, overrides), resolve_priority(b, overrides))
    else:
        return 0
    return -result if sort_order == "desc" else result


def sort_records(
    records: Sequence[T],
    sort_by: str,
    sort_order: str = "asc",
    overrides: Optional[Overrides] = None,
) -> list[T]:
    """Return a stably sorted copy of ``records``."""
    return sorted(
        records,
        key=cmp_to_key(lambda a, b: compare_records(a, b, sort_by, sort_order, overrides)),
    )


# -- Generic field-path sorting --


def _key_value(value: Any, case_sensitive: bool) -> Any:
    if isinstance(value, str) and not case_sensitive:
        return value.lower()
    return value


def _compare_values(a: Any, b: Any) -> int:
    try:
        return _sign(a, b)
    except TypeError:
        # Mixed types: order by type name, then by string form
        return _sign((type(a).__name__, str(a)), (type(b).__name__, str(b)))


def compare_by_key(a: Any, b: Any, key: SortKey) -> int:
    va, vb = get_field(a, key.field), get_field(b, key.field)
    a_null, b_null = is_null(va), is_null(vb)
    if a_null or b_null:
        if a_null and b_null:
            return 0
        # Null placement ignores direction
        return (-1 if a_null else 1) if key.nulls_first else (1 if a_null else -1)

    result = _compare_values(
        _key_value(va, key.case_sensitive), _key_value(vb, key.case_sensitive)
    )
    return -result if key.direction == "desc" else result


def sort_by_keys(records: Sequence[T], keys: Sequence[SortKey]) -> list[T]:
    """Stable sort by a list of SortKeys; earlier keys take precedence."""
    if not keys:
        return list(records)

    def compare(a: Any, b: Any) -> int:
        for key in keys:
            result = compare_by_key(a, b, key)
            if result:
                return result
        return 0

    return sorted(records, key=cmp_to_key(compare))
