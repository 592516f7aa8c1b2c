"""GitHub issue fetcher via gh CLI.

Fetches issues with the `gh` CLI tool and normalizes gh's JSON output
into the REST API issue shape the search engine reads
(``user.login``, ``assignees[].login``, ``created_at``, ...).
"""

from __future__ import annotations

import json
import logging
import re
import subprocess
from typing import Any

from sieve.sources.base import SourceConfig

logger = logging.getLogger(__name__)

# gh JSON fields we request for issue listing
_ISSUE_FIELDS = (
    "number,title,state,body,author,assignees,labels,createdAt,updatedAt,"
    "closedAt,url"
)

_GH_TIMEOUT = 60


class GitHubSourceError(Exception):
    """Raised when a GitHub source operation fails."""


class GitHubSource:
    """Fetch issues from a GitHub repository as search records."""

    def fetch_issues(self, config: SourceConfig) -> list[dict[str, Any]]:
        """Fetch issues via gh CLI, normalized to REST issue records."""
        cmd = [
            "gh", "issue", "list",
            "--repo", config.repo,
            "--json", _ISSUE_FIELDS,
            "--limit", str(config.limit),
        ]

        # gh defaults to open issues only
        cmd.extend(["--state", config.state or "all"])

        for label in config.labels:
            cmd.extend(["--label", label])

        if config.since:
            # gh uses --search for date filters with GitHub search syntax
            cmd.extend(["--search", f"created:>={config.since}"])

        raw = self._run_gh(cmd)
        logger.debug("Fetched %d issues from %s", len(raw), config.repo)
        return [normalize_issue(issue) for issue in raw]

    def detect_repo(self) -> str | None:
        """Try to detect owner/repo from git remote origin."""
        try:
            result = subprocess.run(
                ["git", "remote", "-v"],
                capture_output=True, text=True, timeout=10,
            )
            if result.returncode != 0:
                return None
            return _parse_github_remote(result.stdout)
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return None

    # -- Internal helpers --

    def _run_gh(self, cmd: list[str]) -> list[dict]:
        """Run a gh command that returns a JSON array."""
        raw = self._exec_gh(cmd)
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise GitHubSourceError(f"gh returned invalid JSON: {e}")
        if not isinstance(data, list):
            return [data] if data else []
        return data

    def _exec_gh(self, cmd: list[str]) -> str:
        """Execute a gh CLI command and return stdout."""
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=_GH_TIMEOUT,
            )
        except FileNotFoundError:
            raise GitHubSourceError(
                "gh CLI not found. Install it: https://cli.github.com/"
            )
        except subprocess.TimeoutExpired:
            raise GitHubSourceError(f"gh command timed out after {_GH_TIMEOUT} seconds")

        if result.returncode != 0:
            stderr = result.stderr.strip()
            if "auth login" in stderr or "not logged" in stderr.lower():
                raise GitHubSourceError(
                    f"gh authentication required. Run: gh auth login\n{stderr}"
                )
            raise GitHubSourceError(f"gh command failed: {stderr}")

        return result.stdout


# -- Module-level helpers --


def normalize_issue(issue: dict) -> dict[str, Any]:
    """Convert a gh issue dict (camelCase, 'author') to the REST shape."""
    labels = [
        {"name": lbl.get("name", ""), "color": lbl.get("color", "")}
        for lbl in issue.get("labels", []) or []
        if lbl.get("name")
    ]
    assignees = [
        {"login": a.get("login", "")}
        for a in issue.get("assignees", []) or []
        if a.get("login")
    ]
    return {
        "number": issue.get("number"),
        "title": issue.get("title", "") or "",
        "body": issue.get("body", "") or "",
        "state": (issue.get("state", "") or "").lower(),
        "user": {"login": _get_author_login(issue)},
        "assignees": assignees,
        "labels": labels,
        "created_at": issue.get("createdAt", ""),
        "updated_at": issue.get("updatedAt", "") or issue.get("createdAt", ""),
        "closed_at": issue.get("closedAt") or None,
        "html_url": issue.get("url", ""),
    }


def _get_author_login(obj: dict) -> str:
    """Extract author login from an issue dict."""
    author = obj.get("author", {})
    if isinstance(author, dict):
        return author.get("login", "unknown")
    if isinstance(author, str):
        return author
    return "unknown"


def _parse_github_remote(remote_output: str) -> str | None:
    """Parse git remote -v output for a GitHub repository.

    Handles both SSH and HTTPS formats:
      git@github.com:owner/repo.git
      https://github.com/owner/repo.git
      https://github.com/owner/repo
    """
    for line in remote_output.splitlines():
        m = re.search(r"github\.com[:/]([^/]+/[^/\s]+?)(?:\.git)?\s", line)
        if m:
            return m.group(1)
    return None
