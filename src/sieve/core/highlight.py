"""Wrap occurrences of search terms in highlight markers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from collections.abc import Iterable


@dataclass(frozen=True)
class HighlightMarker:
    open: str
    close: str


HTML_MARKER = HighlightMarker('<mark class="search-highlight">', "</mark>")


def highlight(text: str, terms: Iterable[str], marker: HighlightMarker = HTML_MARKER) -> str:
    """Mark every case-insensitive occurrence of each term in ``text``.

    Terms are escaped, so ``$100`` matches literally. Each term is applied to
    the output of the previous one; the matched text keeps its casing.
    """
    result = text
    for term in terms:
        if not term:
            continue
        pattern = re.compile(f"({re.escape(term)})", re.IGNORECASE)
        result = pattern.sub(lambda m: f"{marker.open}{m.group(1)}{marker.close}", result)
    return result


highlight_search_terms = highlight
