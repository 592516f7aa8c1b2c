"""Output formatting utilities: text vs JSON, rich tables."""

from __future__ import annotations

import json
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from sieve.core import fields
from sieve.core.schema import SearchResult

console = Console()
error_console = Console(stderr=True)


def is_piped() -> bool:
    return not sys.stdout.isatty()


def output(data: Any, fmt: str | None = None) -> None:
    """Output data in the requested format.

    If fmt is None, auto-detect: json when piped, text for TTY.
    """
    if fmt is None:
        fmt = "json" if is_piped() else "text"

    if fmt == "json":
        if hasattr(data, "model_dump_json"):
            print(data.model_dump_json(indent=2, by_alias=True))
        elif isinstance(data, (dict, list)):
            print(json.dumps(data, indent=2, default=str))
        else:
            print(json.dumps({"value": str(data)}, default=str))
    else:
        if isinstance(data, str):
            console.print(data)
        elif hasattr(data, "model_dump_json"):
            console.print_json(data.model_dump_json(indent=2, by_alias=True))
        elif isinstance(data, (dict, list)):
            console.print_json(json.dumps(data, default=str))
        else:
            console.print(str(data))


def _cell(value: Any) -> Any:
    return value if isinstance(value, Text) else str(value)


def output_table(rows: list[dict[str, Any]], columns: list[str], fmt: str | None = None) -> None:
    if fmt is None:
        fmt = "json" if is_piped() else "text"

    if fmt == "json":
        print(json.dumps(rows, indent=2, default=str))
    else:
        table = Table()
        for col in columns:
            table.add_column(col.title())
        for row in rows:
            table.add_row(*[_cell(row.get(col, "")) for col in columns])
        console.print(table)


def record_rows(records: list[Any], terms: list[str] | None = None) -> list[dict[str, Any]]:
    """Flatten issue records into table rows, marking terms in titles."""
    rows = []
    for r in records:
        title = Text(fields.title(r))
        if terms:
            title.highlight_words(terms, style="reverse", case_sensitive=False)
        number = fields.record_number(r)
        rows.append({
            "number": "" if number is None else str(number),
            "state": fields.state(r),
            "title": title,
            "author": escape(fields.author_login(r)),
            "labels": escape(", ".join(fields.label_names(r))),
        })
    return rows


def output_search_result(
    result: SearchResult, fmt: str | None = None, highlight_terms: bool = True
) -> None:
    if fmt is None:
        fmt = "json" if is_piped() else "text"

    if fmt == "json":
        output(result, fmt="json")
        return

    terms = result.highlight_terms if highlight_terms else None
    rows = record_rows(result.records, terms)
    output_table(rows, ["number", "state", "title", "author", "labels"], fmt="text")
    info(
        f"{result.matching_count} of {result.total_count} records matched "
        f"in {result.search_time_ms:.1f}ms"
    )


def error(msg: str) -> None:
    error_console.print(f"[red]Error:[/red] {escape(msg)}")


def success(msg: str) -> None:
    console.print(f"[green]{msg}[/green]")


def info(msg: str) -> None:
    console.print(f"[dim]{msg}[/dim]")
