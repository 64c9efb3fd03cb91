"""Shared test fixtures.

Settings are read from ``WSFORGE_*`` environment variables and cached, so
every test starts from a clean environment and an empty settings cache.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from wsforge.wizard.settings import get_settings


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop WSFORGE_* variables and the settings cache around each test."""
    for key in list(os.environ):
        if key.startswith("WSFORGE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(os.path.dirname(__file__))  # keep a developer's .env out of tests
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
