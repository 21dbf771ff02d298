# tests/integration/conftest.py - v9
"""Shared fixtures for integration tests.

Every test runs in its own working directory with the report cache
under tmp_path, so no .env file or user cache is ever read.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from myday.logging.logger import ROOT_LOGGER_NAME


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated environment for main(); returns the cache root."""
    cache_root = tmp_path / "cache"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CACHE_ROOT", str(cache_root))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    for name in (
        "CACHE_ENABLED",
        "SUMMARY_STYLE",
        "SUMMARIZATION_MODE",
        "FALLBACK_STRATEGY",
        "PRIORITIZE_RECENT_WORK",
        "MIN_MEANINGFUL_COMMENT_CHARS",
        "EXPORT_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    yield cache_root
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
