"""CLI fixtures: isolated global config."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Redirect the global config dir to a temp directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setattr("sieve.utils.config.global_config_dir", lambda: config_dir)
    return config_dir
