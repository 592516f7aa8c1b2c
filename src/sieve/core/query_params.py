"""Round-trip search filters through URL query strings (?q=...&state=...)."""

from __future__ import annotations

from urllib.parse import parse_qs, urlencode

from sieve.core.schema import SearchFilters


def build_search_query(filters: SearchFilters, query: str = "") -> str:
    params: list[tuple[str, str]] = []
    if query.strip():
        params.append(("q", query.strip()))
    if filters.state and filters.state != "all":
        params.append(("state", filters.state))
    if filters.author:
        params.append(("author", filters.author))
    if filters.assignee:
        params.append(("assignee", filters.assignee))
    if filters.labels:
        params.append(("labels", ",".join(filters.labels)))
    return urlencode(params)


def parse_search_query(query_string: str) -> tuple[str, SearchFilters]:
    """Parse a query string into the free-text query and its filters.

    Unknown state values fall back to 'all'.
    """
    params = parse_qs(query_string.lstrip("?"))

    def first(name: str) -> str:
        values = params.get(name)
        return values[0] if values else ""

    state = first("state")
    if state not in ("open", "closed"):
        state = "all"
    labels = [lb for lb in first("labels").split(",") if lb]

    filters = SearchFilters(
        state=state,
        author=first("author") or None,
        assignee=first("assignee") or None,
        labels=labels,
    )
    return first("q"), filters
