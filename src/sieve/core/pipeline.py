"""Issue search pipeline: text query, shallow filters, filter tree, sort."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any, Optional

from sieve.core import fields
from sieve.core.accessor import get_field
from sieve.core.filters import apply_filters
from sieve.core.schema import (
    FilterOptions,
    LabelCategories,
    SearchFilters,
    SearchRequest,
    SearchResult,
)
from sieve.core.search import filter_by_text
from sieve.core.sorting import sort_records
from sieve.utils.dates import as_utc, parse_instant

logger = logging.getLogger(__name__)


def search(records: Sequence[Any], request: SearchRequest) -> SearchResult:
    """Run a search request over ``records``.

    Steps: free-text match, shallow filters, filter groups, then a stable
    sort when ``sort_by`` is set. The input sequence and its records are
    never modified.
    """
    started = time.perf_counter()

    matched, highlight_terms = filter_by_text(records, request.query)
    if has_active_filters(request.filters):
        matched = apply_search_filters(matched, request.filters)
    if request.filter_groups:
        matched = list(apply_filters(matched, request.filter_groups))
    if request.sort_by:
        matched = sort_records(
            matched,
            request.sort_by,
            request.sort_order,
            request.classification_overrides,
        )

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.debug(
        "search query=%r matched %d/%d in %.2fms",
        request.query, len(matched), len(records), elapsed_ms,
    )
    return SearchResult(
        records=matched,
        total_count=len(records),
        matching_count=len(matched),
        search_time_ms=elapsed_ms,
        highlight_terms=highlight_terms,
    )


def apply_search_filters(records: Sequence[Any], filters: SearchFilters) -> list[Any]:
    """Apply the shallow issue filters (state, labels, people, dates)."""
    out = list(records)

    if filters.state and filters.state != "all":
        out = [r for r in out if fields.state(r).lower() == filters.state]

    if filters.labels:
        wanted = filters.labels
        out = [r for r in out if _has_all_labels(r, wanted)]

    if filters.label_categories and not filters.label_categories.is_empty():
        cats = filters.label_categories
        out = [r for r in out if _matches_categories(r, cats)]

    if filters.author:
        author = filters.author.lower()
        out = [r for r in out if fields.author_login(r).lower() == author]

    if filters.assignee:
        assignee = filters.assignee.lower()
        out = [
            r for r in out
            if any(a.lower() == assignee for a in fields.assignee_logins(r))
        ]

    if filters.date_range:
        start = as_utc(filters.date_range.start)
        end = as_utc(filters.date_range.end)
        out = [r for r in out if _created_within(r, start, end)]

    return out


def _has_all_labels(record: Any, wanted: list[str]) -> bool:
    names = set(fields.label_names(record))
    return all(label in names for label in wanted)


def _matches_categories(record: Any, categories: LabelCategories) -> bool:
    names = set(fields.label_names(record))
    for selected in (categories.priority, categories.type, categories.other):
        if selected and not any(label in names for label in selected):
            return False
    return True


def _created_within(record: Any, start, end) -> bool:
    created = parse_instant(get_field(record, "created_at"))
    if created is None:
        return False
    return start <= created <= end


def has_active_filters(filters: SearchFilters) -> bool:
    """True when any shallow filter would narrow the result set."""
    return bool(
        (filters.state and filters.state != "all")
        or filters.labels
        or (filters.label_categories and not filters.label_categories.is_empty())
        or filters.author
        or filters.assignee
        or filters.date_range
    )


def filter_options(records: Sequence[Any]) -> FilterOptions:
    """Sorted unique authors, assignees and label names across records."""
    authors: set[str] = set()
    assignees: set[str] = set()
    labels: set[str] = set()
    for record in records:
        login = fields.author_login(record)
        if login:
            authors.add(login)
        assignees.update(fields.assignee_logins(record))
        labels.update(fields.label_names(record))
    return FilterOptions(
        authors=sorted(authors),
        assignees=sorted(assignees),
        labels=sorted(labels),
    )


def label_counts(records: Sequence[Any], state: Optional[str] = "all") -> dict[str, int]:
    """Count records per label name, optionally restricted to one state."""
    counts: dict[str, int] = {}
    for record in records:
        if state and state != "all" and fields.state(record).lower() != state:
            continue
        for name in fields.label_names(record):
            if name.strip():
                counts[name] = counts.get(name, 0) + 1
    return counts
