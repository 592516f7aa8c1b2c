"""Boolean filter trees: and/or groups of conditions and nested groups."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from sieve.core.operators import evaluate_condition
from sieve.core.schema import FilterGroup

T = TypeVar("T")


def evaluate_group(record: Any, group: FilterGroup) -> bool:
    """Evaluate a filter group against one record.

    Conditions and child groups are combined with ``all`` for "and" and
    ``any`` for "or", so an empty "and" group is true and an empty "or"
    group is false. The tree is assumed to be finite and acyclic.
    """
    results = [evaluate_condition(record, c) for c in group.conditions]
    results.extend(evaluate_group(record, g) for g in group.groups or [])

    if group.operator == "and":
        return all(results)
    return any(results)


def apply_filters(records: Sequence[T], groups: Sequence[FilterGroup]) -> Sequence[T]:
    """Keep the records for which every top-level group holds.

    An empty ``groups`` sequence returns ``records`` itself, untouched.
    """
    if not groups:
        return records
    return [r for r in records if all(evaluate_group(r, g) for g in groups)]
