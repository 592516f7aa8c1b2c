"""Typer app: search, filter, options and params commands."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from sieve.cli._shared import (
    FILE_OPTION,
    FORMAT_OPTION,
    REPO_OPTION,
    get_records,
    load_filter_groups,
    load_overrides,
)
from sieve.core.filters import apply_filters
from sieve.core.pipeline import filter_options, label_counts, search
from sieve.core.query_params import build_search_query, parse_search_query
from sieve.core.schema import DateRange, SearchFilters, SearchRequest, SortKey
from sieve.core.sorting import sort_by_keys
from sieve.utils.config import load_global_config
from sieve.utils.output import (
    error,
    info,
    output,
    output_search_result,
    output_table,
    record_rows,
)

app = typer.Typer(
    name="sieve",
    help="Issue sieve: filter, search and sort issue-tracker records.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _date_range(since: Optional[datetime], until: Optional[datetime]) -> Optional[DateRange]:
    if since is None and until is None:
        return None
    return DateRange(
        start=since or datetime.min.replace(tzinfo=timezone.utc),
        end=until or datetime.max.replace(tzinfo=timezone.utc),
    )


@app.command("search")
def search_command(
    query: str = typer.Argument("", help="Free-text query; every word must match"),
    file: Optional[Path] = FILE_OPTION,
    repo: Optional[str] = REPO_OPTION,
    state: Optional[str] = typer.Option(None, "--state", "-s", help="open, closed or all"),
    labels: Optional[List[str]] = typer.Option(None, "--label", "-l", help="Required label (repeatable)"),
    author: Optional[str] = typer.Option(None, "--author", help="Author login"),
    assignee: Optional[str] = typer.Option(None, "--assignee", help="Assignee login"),
    since: Optional[datetime] = typer.Option(None, "--since", help="Created on or after"),
    until: Optional[datetime] = typer.Option(None, "--until", help="Created on or before"),
    sort: Optional[str] = typer.Option(None, "--sort", help="created, updated, priority or number"),
    order: Optional[str] = typer.Option(None, "--order", help="asc or desc"),
    overrides: Optional[Path] = typer.Option(None, "--overrides", help="JSON map of number -> {priority}"),
    filters_file: Optional[Path] = typer.Option(None, "--filters", help="JSON filter groups"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Show at most N records"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Search issues by text, filters and sort order."""
    config = load_global_config()
    try:
        request = SearchRequest(
            query=query,
            filters=SearchFilters(
                state=state or config.get("default_state"),
                labels=labels or [],
                author=author,
                assignee=assignee,
                date_range=_date_range(since, until),
            ),
            sort_by=sort or config.get("default_sort"),
            sort_order=order or config.get("default_order", "asc"),
            classification_overrides=load_overrides(overrides),
            filter_groups=load_filter_groups(filters_file),
        )
    except ValidationError as e:
        error(f"Invalid search options:\n{e}")
        raise typer.Exit(1)

    records = get_records(file, repo)
    result = search(records, request)
    if limit is not None:
        result.records = result.records[:limit]

    output_search_result(result, fmt=fmt, highlight_terms=config.get("highlight", "on") == "on")


def _parse_sort_key(spec: str) -> SortKey:
    field, _, direction = spec.partition(":")
    return SortKey(field=field, direction=direction or "asc")


@app.command("filter")
def filter_command(
    filters_file: Path = typer.Option(..., "--filters", help="JSON filter groups"),
    file: Optional[Path] = FILE_OPTION,
    repo: Optional[str] = REPO_OPTION,
    sort_keys: Optional[List[str]] = typer.Option(
        None, "--sort-key", "-k", help="field[:asc|desc], repeatable; first key wins"
    ),
    nulls_first: bool = typer.Option(False, "--nulls-first", help="Place missing values first"),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="Case-insensitive sort"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Apply filter groups to records, optionally sorting by field paths."""
    groups = load_filter_groups(filters_file)
    try:
        keys = [
            _parse_sort_key(k).model_copy(
                update={"nulls_first": nulls_first, "case_sensitive": not ignore_case}
            )
            for k in sort_keys or []
        ]
    except ValidationError as e:
        error(f"Invalid sort key:\n{e}")
        raise typer.Exit(1)

    records = get_records(file, repo)
    matched = sort_by_keys(apply_filters(records, groups), keys)

    if fmt == "json" or (fmt is None and not sys.stdout.isatty()):
        output(matched, fmt="json")
    else:
        output_table(record_rows(matched), ["number", "state", "title", "author", "labels"], fmt="text")
        info(f"{len(matched)} of {len(records)} records matched")


@app.command("options")
def options_command(
    file: Optional[Path] = FILE_OPTION,
    repo: Optional[str] = REPO_OPTION,
    state: str = typer.Option("all", "--state", "-s", help="Count labels for open, closed or all"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List authors, assignees and labels available for filtering."""
    records = get_records(file, repo)
    opts = filter_options(records)
    counts = label_counts(records, state)
    data = {**opts.model_dump(), "label_counts": counts}

    if fmt == "json" or (fmt is None and not sys.stdout.isatty()):
        output(data, fmt="json")
    else:
        info(f"Authors: {', '.join(opts.authors) or '(none)'}")
        info(f"Assignees: {', '.join(opts.assignees) or '(none)'}")
        output_table(
            [{"label": name, "count": counts.get(name, 0)} for name in opts.labels],
            ["label", "count"],
            fmt="text",
        )


@app.command("params")
def params_command(
    query: str = typer.Argument("", help="Free-text query"),
    state: str = typer.Option("all", "--state", "-s"),
    labels: Optional[List[str]] = typer.Option(None, "--label", "-l"),
    author: Optional[str] = typer.Option(None, "--author"),
    assignee: Optional[str] = typer.Option(None, "--assignee"),
) -> None:
    """Print the URL query string for a search."""
    try:
        filters = SearchFilters(state=state, labels=labels or [], author=author, assignee=assignee)
    except ValidationError as e:
        error(f"Invalid search options:\n{e}")
        raise typer.Exit(1)
    print(build_search_query(filters, query))


@app.command("parse-params")
def parse_params_command(
    query_string: str = typer.Argument(..., help="URL query string, e.g. 'q=bug&state=open'"),
) -> None:
    """Decode a URL query string into the search query and filters (JSON)."""
    query, filters = parse_search_query(query_string)
    output({"query": query, "filters": filters.model_dump(mode="json")}, fmt="json")


# Register subcommand groups
from sieve.cli.config_cmd import config_app

app.add_typer(config_app, name="config", help="Manage global configuration")
