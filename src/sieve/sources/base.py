"""Base data structures for record sources."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SourceConfig:
    """Configuration for fetching issues from a remote repository."""

    repo: str  # "owner/repo" (required)
    labels: list[str] = field(default_factory=list)  # server-side label filter
    state: str = "all"  # "open", "closed", "all"
    since: str = ""  # ISO date filter
    limit: int = 100  # max issues to fetch
