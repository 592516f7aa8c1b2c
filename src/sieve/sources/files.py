"""Load issue records from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class RecordLoadError(Exception):
    """Raised when a records or configuration file cannot be read."""


def load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except FileNotFoundError:
        raise RecordLoadError(f"File not found: {path}")
    except json.JSONDecodeError as e:
        raise RecordLoadError(f"Invalid JSON in {path}: {e}")


def load_records(path: Path) -> list[dict[str, Any]]:
    """Read a JSON array of records.

    Also accepts an object wrapping the array under ``issues`` or ``records``,
    which is how the dashboard's data files are laid out.
    """
    data = load_json(path)
    if isinstance(data, dict):
        for key in ("issues", "records"):
            if isinstance(data.get(key), list):
                data = data[key]
                break
    if not isinstance(data, list):
        raise RecordLoadError(f"Expected a JSON array of records in {path}")
    return data
