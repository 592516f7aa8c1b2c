"""Tests for free-text matching."""

from sieve.core.search import filter_by_text, matches_query, searchable_text, tokens


class TestTokens:
    def test_lowercases_and_splits(self):
        assert tokens("  Bug   FIX\tnow ") == ["bug", "fix", "now"]

    def test_empty(self):
        assert tokens("") == []
        assert tokens("   ") == []


class TestMatchesQuery:
    def test_all_tokens_required(self, make_issue):
        issue = make_issue(title="Bug in authentication", body="fix applied")
        assert matches_query(issue, "bug fix")
        assert not matches_query(issue, "bug crash")

    def test_tokens_can_span_fields(self, make_issue):
        issue = make_issue(title="Slow page", author="Alice", labels=["performance"])
        assert matches_query(issue, "alice perf slow")

    def test_substring_match(self, make_issue):
        issue = make_issue(title="Authentication")
        assert matches_query(issue, "thent")

    def test_empty_query_matches(self, make_issue):
        assert matches_query(make_issue(), "")
        assert matches_query(make_issue(), "   ")

    def test_null_body(self, make_issue):
        issue = make_issue(title="Crash", body=None)
        assert matches_query(issue, "crash")
        assert "none" not in searchable_text(issue)

    def test_gh_author_field(self):
        issue = {"title": "t", "author": {"login": "octocat"}, "labels": []}
        assert matches_query(issue, "octocat")


class TestFilterByText:
    def test_returns_terms(self, issues):
        matched, terms = filter_by_text(issues, "bug fix")
        assert [i["number"] for i in matched] == [1]
        assert terms == ["bug", "fix"]

    def test_empty_query_keeps_all(self, issues):
        matched, terms = filter_by_text(issues, "")
        assert matched == issues
        assert matched is not issues
        assert terms == []

    def test_agrees_with_matches_query(self, issues):
        for query in ("bug", "alice crash", "priority", "nothing-here"):
            matched, _ = filter_by_text(issues, query)
            assert matched == [i for i in issues if matches_query(i, query)]
