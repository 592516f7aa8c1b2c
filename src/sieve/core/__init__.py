"""Record filter-and-search engine."""

from __future__ import annotations

from sieve.core.accessor import NOT_FOUND, get_field
from sieve.core.filters import apply_filters, evaluate_group
from sieve.core.highlight import highlight, highlight_search_terms
from sieve.core.operators import evaluate, evaluate_condition
from sieve.core.pipeline import search
from sieve.core.search import matches_query, tokens
from sieve.core.sorting import compare_records, sort_by_keys, sort_records

__all__ = [
    "NOT_FOUND",
    "apply_filters",
    "compare_records",
    "evaluate",
    "evaluate_condition",
    "evaluate_group",
    "get_field",
    "highlight",
    "highlight_search_terms",
    "matches_query",
    "search",
    "sort_by_keys",
    "sort_records",
    "tokens",
]
