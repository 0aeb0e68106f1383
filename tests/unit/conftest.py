# tests/unit/conftest.py
from __future__ import annotations

import pytest

from tests.unit.fakes import FakeDriver
from watir.browser import Browser
from watir.utils.config import get_settings


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    """Short waits and a clean settings cache for every test."""
    monkeypatch.setenv("WATIR_DEFAULT_TIMEOUT", "0.3")
    monkeypatch.setenv("WATIR_POLL_INTERVAL", "0.01")
    monkeypatch.setenv("WATIR_ALWAYS_LOCATE", "true")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def make_browser():
    """Factory: make_browser(html) -> (Browser, FakeDriver)."""

    def _make(html: str, **kwargs):
        driver = FakeDriver(html, **kwargs)
        return Browser(driver=driver), driver

    return _make
