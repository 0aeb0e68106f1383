import pytest
from pydantic import ValidationError

from watir.utils.config import BrowserName, configure, default_timeout, get_settings


def test_env_prefix_is_read(fast_settings):
    assert fast_settings.DEFAULT_TIMEOUT == 0.3
    assert fast_settings.POLL_INTERVAL == 0.01
    assert fast_settings.ALWAYS_LOCATE is True


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_configure_is_case_insensitive_and_validated():
    s = configure(default_timeout=2, Always_Locate=False)
    assert s.DEFAULT_TIMEOUT == 2.0
    assert s.ALWAYS_LOCATE is False

    with pytest.raises(KeyError):
        configure(nope=1)
    with pytest.raises(ValidationError):
        configure(default_timeout=-1)


def test_browser_name_and_arguments(monkeypatch):
    monkeypatch.setenv("WATIR_BROWSER", " FireFox ")
    monkeypatch.setenv("WATIR_HEADLESS", "1")
    monkeypatch.setenv("WATIR_BROWSER_ARGS", '["--width=800"]')
    get_settings.cache_clear()

    s = get_settings()
    assert s.BROWSER is BrowserName.firefox
    assert s.browser_arguments() == ["--width=800", "-headless"]

    configure(browser="chrome")
    assert s.browser_arguments() == ["--width=800", "--headless=new"]


def test_default_timeout_helper():
    assert default_timeout() == 0.3
    assert default_timeout(2) == 2.0
    assert default_timeout(-5) == 0.0
