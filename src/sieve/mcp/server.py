"""MCP server exposing the issue search engine as tools."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import TypeAdapter, ValidationError

from sieve.core.filters import apply_filters
from sieve.core.highlight import highlight
from sieve.core.pipeline import filter_options, label_counts, search
from sieve.core.schema import FilterGroup, SearchRequest, SortKey
from sieve.core.sorting import sort_by_keys
from sieve.sources.files import RecordLoadError, load_records


_INSTRUCTIONS = (
    "Issue sieve searches, filters and sorts issue-tracker records. "
    "Pass records inline as a JSON array or point `path` at a JSON file."
)

mcp = FastMCP("issue-sieve", instructions=_INSTRUCTIONS)

_GROUPS = TypeAdapter(list[FilterGroup])
_SORT_KEYS = TypeAdapter(list[SortKey])


class ToolInputError(Exception):
    """Raised when tool arguments cannot be decoded."""


def _records(records_json: str, path: str) -> list[Any]:
    """Resolve records from inline JSON or a file path."""
    if path:
        try:
            return load_records(Path(path))
        except RecordLoadError as e:
            raise ToolInputError(str(e))
    if not records_json:
        raise ToolInputError("Provide records_json or path")
    try:
        data = json.loads(records_json)
    except json.JSONDecodeError as e:
        raise ToolInputError(f"Invalid records JSON: {e}")
    if not isinstance(data, list):
        raise ToolInputError("records_json must be a JSON array")
    return data


def _error(message: str) -> str:
    return json.dumps({"error": message})


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool()
def issues_search(request_json: str = "{}", records_json: str = "", path: str = "") -> str:
    """Search issues by free text, shallow filters and filter groups, then sort.

    Args:
        request_json: SearchRequest as JSON, e.g.
            '{"query": "bug", "filters": {"state": "open"}, "sortBy": "priority", "sortOrder": "desc"}'
        records_json: JSON array of issue records
        path: JSON file with issue records (used instead of records_json)
    """
    try:
        records = _records(records_json, path)
        request = SearchRequest.model_validate_json(request_json or "{}")
    except ToolInputError as e:
        return _error(str(e))
    except ValidationError as e:
        return _error(f"Invalid search request: {e}")

    result = search(records, request)
    return result.model_dump_json(indent=2, by_alias=True)


@mcp.tool()
def issues_filter(
    filters_json: str, records_json: str = "", path: str = "", sort_json: str = "[]"
) -> str:
    """Apply a list of filter groups (implicitly and-ed) and optional sort keys.

    Args:
        filters_json: JSON list of filter groups, e.g.
            '[{"operator": "and", "conditions": [{"field": "state", "operator": "eq", "value": "open"}]}]'
        records_json: JSON array of records
        path: JSON file with records (used instead of records_json)
        sort_json: JSON list of sort keys, e.g. '[{"field": "number", "direction": "desc"}]'
    """
    try:
        records = _records(records_json, path)
        groups = _GROUPS.validate_json(filters_json)
        keys = _SORT_KEYS.validate_json(sort_json or "[]")
    except ToolInputError as e:
        return _error(str(e))
    except ValidationError as e:
        return _error(f"Invalid filters or sort keys: {e}")

    matched = sort_by_keys(apply_filters(records, groups), keys)
    return json.dumps(
        {"records": matched, "totalCount": len(records), "matchingCount": len(matched)},
        indent=2,
        default=str,
    )


@mcp.tool()
def issues_filter_options(records_json: str = "", path: str = "", state: str = "all") -> str:
    """List authors, assignees and labels, with label counts for a state.

    Args:
        records_json: JSON array of issue records
        path: JSON file with issue records (used instead of records_json)
        state: open, closed or all (for label counts)
    """
    try:
        records = _records(records_json, path)
    except ToolInputError as e:
        return _error(str(e))

    opts = filter_options(records)
    return json.dumps(
        {**opts.model_dump(), "label_counts": label_counts(records, state)}, indent=2
    )


@mcp.tool()
def issues_highlight(text: str, terms: list[str]) -> str:
    """Wrap each case-insensitive occurrence of the terms in <mark> tags."""
    return highlight(text, terms)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """Run the MCP server on stdio."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
