"""Tests for record table rows."""

from rich.text import Text

from sieve.utils.output import record_rows


class TestRecordRows:
    def test_title_highlight_keeps_plain_text(self):
        (row,) = record_rows([{"number": 7, "title": "Bug in release"}], ["bug", "e"])
        title = row["title"]
        assert isinstance(title, Text)
        assert title.plain == "Bug in release"
        assert "[reverse]" not in title.plain
        highlighted = {title.plain[s.start:s.end] for s in title.spans}
        assert highlighted == {"Bug", "e"}
        assert all(s.style == "reverse" for s in title.spans)

    def test_highlight_is_case_insensitive(self):
        (row,) = record_rows([{"title": "CRASH on start"}], ["crash"])
        spans = row["title"].spans
        assert [(s.start, s.end) for s in spans] == [(0, 5)]

    def test_no_terms_no_spans(self):
        (row,) = record_rows([{"title": "Bug"}])
        assert row["title"].spans == []

    def test_title_markup_is_literal(self):
        (row,) = record_rows([{"title": "[bold]x[/bold]"}], ["x"])
        assert row["title"].plain == "[bold]x[/bold]"

    def test_issue_number_zero(self):
        (row,) = record_rows([{"number": 0, "title": "t"}])
        assert row["number"] == "0"

    def test_missing_number_is_blank(self):
        (row,) = record_rows([{"title": "t"}])
        assert row["number"] == ""
