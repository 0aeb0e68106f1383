import re

import pytest
from selenium.common.exceptions import NoSuchWindowException

from tests.unit.fakes import _SwitchTo
from watir.exceptions import NoMatchingWindowFoundError, WaitTimeoutError

MAIN = "<html><head><title>window switching</title></head><body><div id='main'>main</div></body></html>"
POPUP = "<html><head><title>closeable window</title></head><body><div id='popup'>popup</div></body></html>"


@pytest.fixture
def two_windows(make_browser):
    browser, driver = make_browser(MAIN, url="http://x/window_switching.html")
    driver.open_window(POPUP, "http://x/closeable.html")
    return browser, driver


def test_lists_windows(two_windows):
    browser, _ = two_windows
    assert len(browser.windows()) == 2
    assert len(browser.windows(title="closeable window")) == 1
    assert browser.windows(title="noop").is_empty
    assert browser.windows(url=re.compile("closeable")).first.handle == "window-2"


def test_invalid_selectors(two_windows):
    browser, _ = two_windows
    with pytest.raises(ValueError):
        browser.window(name="x")
    with pytest.raises(ValueError):
        browser.windows(index=0)


def test_use_by_url_title_and_index(two_windows):
    browser, _ = two_windows

    browser.window(url=re.compile(r"closeable\.html$")).use()
    assert browser.title == "closeable window"

    browser.window(title="window switching").use()
    assert browser.title == "window switching"

    assert browser.window(index=1).handle == "window-2"
    assert browser.window(index=-1).handle == "window-2"


def test_missing_window(two_windows):
    browser, _ = two_windows
    assert browser.window(handle="bar").present is False
    with pytest.raises(NoMatchingWindowFoundError):
        browser.window(handle="bar").use()
    with pytest.raises(NoMatchingWindowFoundError):
        browser.window(title="noop").title
    assert browser.window(index=7).exists is False


def test_reads_do_not_switch(two_windows):
    browser, _ = two_windows
    current = browser.window()

    popup = browser.window(index=1)
    assert popup.title == "closeable window"
    assert popup.url == "http://x/closeable.html"
    assert browser.title == "window switching"
    assert current.is_current
    assert not popup.is_current


def test_window_handle_survives_switching(two_windows):
    browser, _ = two_windows
    original = browser.window()
    browser.window(index=1).use()
    assert "window_switching" in original.url
    assert browser.title == "closeable window"


def test_context_manager_switches_back(two_windows):
    browser, _ = two_windows
    with browser.window(title="closeable window") as popup:
        assert popup.is_current
        assert browser.div(id="popup").text == "popup"
    assert browser.title == "window switching"


def test_match_by_element(two_windows):
    browser, _ = two_windows
    found = browser.window(element=browser.div(id="popup"))
    assert found.handle == "window-2"
    assert browser.title == "window switching"


def test_close_other_window(two_windows):
    browser, _ = two_windows
    browser.window(title="closeable window").close()
    assert len(browser.windows()) == 1
    assert browser.title == "window switching"


def test_equality(two_windows):
    browser, _ = two_windows
    assert browser.window() == browser.window(index=0)
    assert browser.window() != browser.window(index=1)
    assert browser.windows() == browser.windows()


def test_closed_window_is_not_equal_or_present(two_windows):
    browser, _ = two_windows
    original = browser.window()
    other = browser.window(index=1)
    other.use()
    original.close()

    assert other != original
    assert original.present is False
    with pytest.raises(NoMatchingWindowFoundError):
        original.use()


def test_current_window_closed_underneath(two_windows):
    browser, driver = two_windows
    browser.window(title="closeable window").use()
    driver.close()

    assert browser.window().present is False
    with pytest.raises(NoMatchingWindowFoundError):
        browser.window().use()


def test_vanishing_window_is_skipped(two_windows, monkeypatch):
    browser, _ = two_windows
    original = _SwitchTo.window

    def flaky(self, handle):
        if handle == "window-2":
            raise NoSuchWindowException("closed while looking")
        original(self, handle)

    monkeypatch.setattr(_SwitchTo, "window", flaky)
    assert [w.handle for w in browser.windows(title=re.compile("."))] == ["window-1"]


def test_wait_until_present_times_out(two_windows):
    browser, _ = two_windows
    with pytest.raises(WaitTimeoutError):
        browser.window(title="noop").wait_until_present(timeout=0.05)


def test_switch_window_and_original(two_windows):
    browser, _ = two_windows
    popup = browser.switch_window()
    assert popup.handle == "window-2"
    assert browser.title == "closeable window"

    browser.original_window.use()
    assert browser.title == "window switching"
