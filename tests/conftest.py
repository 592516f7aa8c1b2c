"""Shared fixtures: issue records in the GitHub REST shape."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def _make_issue(
    number: int = 1,
    title: str = "Test issue",
    body: str | None = "Issue body text here.",
    state: str = "open",
    author: str = "testuser",
    labels: list[str] | None = None,
    assignees: list[str] | None = None,
    created_at: str = "2026-01-15T10:00:00Z",
    updated_at: str = "2026-01-16T10:00:00Z",
) -> dict:
    return {
        "id": 1000 + number,
        "number": number,
        "title": title,
        "body": body,
        "state": state,
        "user": {"login": author},
        "labels": [{"name": lb} for lb in (labels or [])],
        "assignees": [{"login": a} for a in (assignees or [])],
        "created_at": created_at,
        "updated_at": updated_at,
    }


@pytest.fixture
def make_issue():
    return _make_issue


@pytest.fixture
def issues() -> list[dict]:
    return [
        _make_issue(
            1,
            title="Bug in authentication",
            body="Login fails after the token refresh; fix applied in #12",
            author="alice",
            labels=["bug", "priority: high"],
            assignees=["bob"],
            created_at="2026-01-10T09:00:00Z",
            updated_at="2026-02-01T09:00:00Z",
        ),
        _make_issue(
            2,
            title="Add dark mode",
            body="Users want a dark theme for the dashboard",
            state="closed",
            author="Bob",
            labels=["enhancement", "priority: low"],
            created_at="2026-01-05T09:00:00Z",
            updated_at="2026-01-20T09:00:00Z",
        ),
        _make_issue(
            3,
            title="Crash on startup",
            body=None,
            author="carol",
            labels=["bug", "Priority: Critical"],
            assignees=["alice", "Dave"],
            created_at="2026-01-20T09:00:00Z",
            updated_at="2026-01-21T09:00:00Z",
        ),
        _make_issue(
            4,
            title="Improve docs",
            body="The setup guide is out of date",
            author="alice",
            labels=["documentation", "priority: medium"],
            created_at="2026-01-01T09:00:00Z",
            updated_at="2026-03-01T09:00:00Z",
        ),
    ]


@pytest.fixture
def issues_file(tmp_path: Path, issues: list[dict]) -> Path:
    path = tmp_path / "issues.json"
    path.write_text(json.dumps(issues))
    return path
