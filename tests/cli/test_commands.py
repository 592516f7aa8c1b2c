"""CLI tests for search, filter, options and params commands."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from sieve.cli.main import app

runner = CliRunner()


def _numbers(payload) -> list[int]:
    return [r["number"] for r in payload]


@pytest.fixture
def groups_file(tmp_path):
    path = tmp_path / "groups.json"
    path.write_text(json.dumps([
        {
            "operator": "or",
            "conditions": [
                {"field": "user.login", "operator": "eq", "value": "carol"},
                {"field": "state", "operator": "eq", "value": "closed"},
            ],
        }
    ]))
    return path


class TestSearchCommand:
    def test_query_json(self, issues_file):
        result = runner.invoke(app, ["search", "bug fix", "--file", str(issues_file)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert _numbers(data["records"]) == [1]
        assert data["highlightTerms"] == ["bug", "fix"]
        assert data["totalCount"] == 4
        assert data["matchingCount"] == 1

    def test_filters_and_sort(self, issues_file):
        result = runner.invoke(app, [
            "search", "--file", str(issues_file),
            "--state", "open", "--sort", "priority", "--order", "desc",
        ])
        assert result.exit_code == 0, result.output
        assert _numbers(json.loads(result.stdout)["records"]) == [3, 1, 4]

    def test_labels_and_author(self, issues_file):
        result = runner.invoke(app, [
            "search", "--file", str(issues_file), "-l", "bug", "--author", "ALICE",
        ])
        assert result.exit_code == 0, result.output
        assert _numbers(json.loads(result.stdout)["records"]) == [1]

    def test_date_range(self, issues_file):
        result = runner.invoke(app, [
            "search", "--file", str(issues_file), "--since", "2026-01-06", "--until", "2026-01-31",
        ])
        assert result.exit_code == 0, result.output
        assert _numbers(json.loads(result.stdout)["records"]) == [1, 3]

    def test_overrides(self, issues_file, tmp_path):
        overrides = tmp_path / "overrides.json"
        overrides.write_text(json.dumps({"2": {"priority": "critical"}}))
        result = runner.invoke(app, [
            "search", "--file", str(issues_file), "--sort", "priority", "--order", "desc",
            "--overrides", str(overrides),
        ])
        assert result.exit_code == 0, result.output
        assert _numbers(json.loads(result.stdout)["records"])[:2] == [2, 3]

    def test_filter_groups(self, issues_file, groups_file):
        result = runner.invoke(app, [
            "search", "--file", str(issues_file), "--filters", str(groups_file),
        ])
        assert result.exit_code == 0, result.output
        assert _numbers(json.loads(result.stdout)["records"]) == [2, 3]

    def test_limit_keeps_counts(self, issues_file):
        result = runner.invoke(app, ["search", "--file", str(issues_file), "-n", "2"])
        data = json.loads(result.stdout)
        assert len(data["records"]) == 2
        assert data["matchingCount"] == 4

    def test_text_format(self, issues_file):
        result = runner.invoke(app, ["search", "crash", "--file", str(issues_file), "-F", "text"])
        assert result.exit_code == 0, result.output
        assert "Crash" in result.stdout
        assert "1 of 4 records matched" in result.stdout

    def test_text_format_multi_term_highlight(self, make_issue, tmp_path):
        path = tmp_path / "issues.json"
        path.write_text(json.dumps([make_issue(1, title="Bug in release")]))
        result = runner.invoke(app, ["search", "bug e", "--file", str(path), "--format", "text"])
        assert result.exit_code == 0, result.output
        assert "Bug in release" in result.stdout
        assert "[reverse]" not in result.stdout
        assert "[/reverse]" not in result.stdout

    def test_invalid_state(self, issues_file):
        result = runner.invoke(app, ["search", "--file", str(issues_file), "--state", "draft"])
        assert result.exit_code == 1
        assert "Invalid search options" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["search", "--file", str(tmp_path / "none.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_filter_groups(self, issues_file, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([{"conditions": [{"field": "", "operator": "eq"}]}]))
        result = runner.invoke(app, ["search", "--file", str(issues_file), "--filters", str(bad)])
        assert result.exit_code == 1
        assert "Invalid filter groups" in result.output

    def test_config_defaults(self, issues_file, clean_config):
        (clean_config / "config.json").write_text(json.dumps({
            "default_sort": "number", "default_order": "desc", "default_state": "open",
        }))
        result = runner.invoke(app, ["search", "--file", str(issues_file)])
        assert _numbers(json.loads(result.stdout)["records"]) == [4, 3, 1]

    def test_options_override_config(self, issues_file, clean_config):
        (clean_config / "config.json").write_text(json.dumps({"default_state": "open"}))
        result = runner.invoke(app, ["search", "--file", str(issues_file), "--state", "closed"])
        assert _numbers(json.loads(result.stdout)["records"]) == [2]

    def test_fetch_from_repo(self):
        gh_issue = {
            "number": 9, "title": "Flaky login test", "state": "OPEN", "body": "",
            "author": {"login": "dev"}, "assignees": [], "labels": [],
            "createdAt": "2026-01-01T00:00:00Z", "updatedAt": "2026-01-02T00:00:00Z",
            "closedAt": None, "url": "https://github.com/o/r/issues/9",
        }
        with patch("sieve.sources.github.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout=json.dumps([gh_issue]), stderr="")
            result = runner.invoke(app, ["search", "flaky", "--repo", "o/r", "--state", "open"])
        assert result.exit_code == 0, result.output
        assert _numbers(json.loads(result.stdout)["records"]) == [9]

    def test_no_source(self):
        with patch("sieve.sources.github.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="not a git repo")
            result = runner.invoke(app, ["search", "x"])
        assert result.exit_code == 1
        assert "No records" in result.output


class TestFilterCommand:
    def test_filter(self, issues_file, groups_file):
        result = runner.invoke(app, [
            "filter", "--filters", str(groups_file), "--file", str(issues_file),
        ])
        assert result.exit_code == 0, result.output
        assert _numbers(json.loads(result.stdout)) == [2, 3]

    def test_filter_with_sort_keys(self, issues_file, groups_file):
        result = runner.invoke(app, [
            "filter", "--filters", str(groups_file), "--file", str(issues_file),
            "-k", "number:desc",
        ])
        assert _numbers(json.loads(result.stdout)) == [3, 2]

    def test_single_group_object(self, issues_file, tmp_path):
        path = tmp_path / "group.json"
        path.write_text(json.dumps({
            "conditions": [{"field": "body", "operator": "isEmpty", "value": None}],
        }))
        result = runner.invoke(app, ["filter", "--filters", str(path), "--file", str(issues_file)])
        assert _numbers(json.loads(result.stdout)) == [3]

    def test_bad_sort_key(self, issues_file, groups_file):
        result = runner.invoke(app, [
            "filter", "--filters", str(groups_file), "--file", str(issues_file),
            "-k", "number:sideways",
        ])
        assert result.exit_code == 1
        assert "Invalid sort key" in result.output


class TestOptionsCommand:
    def test_options(self, issues_file):
        result = runner.invoke(app, ["options", "--file", str(issues_file), "--state", "open"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["authors"] == ["Bob", "alice", "carol"]
        assert data["label_counts"]["bug"] == 2
        assert "enhancement" not in data["label_counts"]


class TestParamsCommands:
    def test_build(self):
        result = runner.invoke(app, ["params", "crash", "--state", "open", "-l", "bug"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "q=crash&state=open&labels=bug"

    def test_parse(self):
        result = runner.invoke(app, ["parse-params", "q=crash&state=closed&author=bob"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["query"] == "crash"
        assert data["filters"]["state"] == "closed"
        assert data["filters"]["author"] == "bob"
