"""Shared CLI utilities: common options and record/config loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import TypeAdapter, ValidationError

from sieve.core.schema import ClassificationOverride, FilterGroup
from sieve.sources.base import SourceConfig
from sieve.sources.files import RecordLoadError, load_json, load_records
from sieve.sources.github import GitHubSource, GitHubSourceError
from sieve.utils.output import error

FORMAT_OPTION = typer.Option(None, "--format", "-F", help="Output format: json or text")
FILE_OPTION = typer.Option(None, "--file", "-f", help="JSON file with an array of issue records")
REPO_OPTION = typer.Option(None, "--repo", "-r", help="GitHub repository (owner/repo) to fetch via gh")

_GROUPS = TypeAdapter(list[FilterGroup])
_OVERRIDES = TypeAdapter(dict[int, ClassificationOverride])


def get_records(file: Optional[Path], repo: Optional[str]) -> list[dict[str, Any]]:
    """Load records from a file, or fetch them from GitHub.

    Without either option the repository is detected from the git remote.
    """
    try:
        if file is not None:
            return load_records(file)
        source = GitHubSource()
        repo = repo or source.detect_repo()
        if repo is None:
            error("No records: pass --file, or --repo when not inside a GitHub clone")
            raise typer.Exit(1)
        return source.fetch_issues(SourceConfig(repo=repo))
    except (RecordLoadError, GitHubSourceError) as e:
        error(str(e))
        raise typer.Exit(1)


def load_filter_groups(path: Optional[Path]) -> list[FilterGroup]:
    """Read filter groups from JSON: a list of groups or a single group."""
    if path is None:
        return []
    try:
        data = load_json(path)
        if isinstance(data, dict):
            data = [data]
        return _GROUPS.validate_python(data)
    except RecordLoadError as e:
        error(str(e))
        raise typer.Exit(1)
    except ValidationError as e:
        error(f"Invalid filter groups in {path}:\n{e}")
        raise typer.Exit(1)


def load_overrides(path: Optional[Path]) -> Optional[dict[int, ClassificationOverride]]:
    """Read a {number: {"priority": level}} classification override map."""
    if path is None:
        return None
    try:
        return _OVERRIDES.validate_python(load_json(path))
    except RecordLoadError as e:
        error(str(e))
        raise typer.Exit(1)
    except ValidationError as e:
        error(f"Invalid classification overrides in {path}:\n{e}")
        raise typer.Exit(1)
