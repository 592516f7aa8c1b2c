"""Issue sieve: filter, search and sort issue-tracker records."""

__version__ = "0.1.0"
