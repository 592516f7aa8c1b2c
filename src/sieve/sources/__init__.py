"""Record sources for the search engine.

Records come either from local JSON files or from a GitHub repository
fetched through the gh CLI.
"""

from __future__ import annotations

from sieve.sources.base import SourceConfig
from sieve.sources.files import RecordLoadError, load_records

__all__ = ["RecordLoadError", "SourceConfig", "load_records"]
