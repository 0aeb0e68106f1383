import pytest
from selenium.webdriver.common.by import By

from tests.unit.fakes import FakeDriver, FakeElement
from watir.browser import Browser
from watir.elements import Div, Span
from watir.exceptions import WatirError

PAGE = """
<html><head><title>home</title></head><body>
  <div id="a">Alpha</div>
  <span id="b">Beta</span>
  <input id="t">
</body></html>
"""


@pytest.mark.parametrize(
    "given, expected",
    [
        ("example.com", "http://example.com"),
        ("localhost:8080/x", "http://localhost:8080/x"),
        ("https://example.com", "https://example.com"),
        ("file:///tmp/page.html", "file:///tmp/page.html"),
        ("about:blank", "about:blank"),
    ],
)
def test_goto_adds_a_scheme_when_missing(make_browser, given, expected):
    browser, _ = make_browser(PAGE)
    assert browser.goto(given) == expected
    assert browser.url == expected


def test_page_reads(make_browser):
    browser, _ = make_browser(PAGE)
    assert browser.title == "home"
    assert browser.text == "Alpha Beta"
    assert "<title>home</title>" in browser.html
    assert browser.ready_state == "complete"
    assert browser.wait() is browser
    assert browser.exists


def test_navigation(make_browser):
    browser, driver = make_browser(PAGE, url="http://start.test", pages={"http://next.test": "<html><body>next</body></html>"})
    browser.goto("next.test")
    assert browser.text == "next"

    browser.back()
    assert browser.url == "http://start.test"
    assert browser.div(id="a").text == "Alpha"

    browser.refresh()
    browser.forward()
    assert driver.calls["refresh"] == 1
    assert driver.calls["forward"] == 1


def test_execute_script_wraps_elements(make_browser):
    browser, driver = make_browser(PAGE)
    driver.script_handlers.append(("return one", lambda *a: driver.find_element(By.ID, "a")))
    driver.script_handlers.append((
        "return many",
        lambda *a: [driver.find_element(By.ID, "a"), {"k": driver.find_element(By.ID, "b"), "n": 3}],
    ))

    one = browser.execute_script("return one")
    assert isinstance(one, Div)
    assert one.text == "Alpha"

    many = browser.execute_script("return many")
    assert isinstance(many[0], Div)
    assert isinstance(many[1]["k"], Span)
    assert many[1]["n"] == 3


def test_execute_script_unwraps_handles(make_browser):
    browser, driver = make_browser(PAGE)
    seen = []
    driver.script_handlers.append(("inspect", lambda *a: seen.extend(a)))

    browser.execute_script("inspect", browser.div(id="a"), [browser.span(id="b")], 7)

    assert isinstance(seen[0], FakeElement)
    assert isinstance(seen[1][0], FakeElement)
    assert seen[2] == 7


def test_send_keys_goes_to_the_active_element(make_browser):
    browser, _ = make_browser(PAGE)
    field = browser.text_field(id="t")
    field.focus()

    browser.send_keys("abc")
    assert field.value == "abc"


def test_closed_browser(make_browser):
    browser, driver = make_browser(PAGE)
    el = browser.div(id="a")
    assert el.exists
    assert len(browser.references) == 1

    browser.close()
    browser.close()

    assert driver.quit_called
    assert browser.closed
    assert not browser.exists
    assert len(browser.references) == 0
    with pytest.raises(WatirError, match="browser was closed"):
        el.text
    with pytest.raises(WatirError, match="browser was closed"):
        browser.url
    with pytest.raises(WatirError, match="browser was closed"):
        browser.goto("example.com")
    assert repr(browser) == "<Browser closed>"


def test_context_manager_closes():
    driver = FakeDriver(PAGE)
    with Browser(driver=driver) as browser:
        assert browser.title == "home"
    assert driver.quit_called


def test_new_session_from_settings(monkeypatch):
    created = {}

    class FakeChrome(FakeDriver):
        def __init__(self, options=None):
            created["options"] = options
            super().__init__(PAGE)

    monkeypatch.setenv("WATIR_HEADLESS", "true")
    monkeypatch.setenv("WATIR_PAGE_LOAD_TIMEOUT", "12")
    from watir.utils.config import get_settings

    get_settings.cache_clear()
    monkeypatch.setattr("watir.browser.webdriver.Chrome", FakeChrome)

    browser = Browser()
    assert "--headless=new" in created["options"].arguments
    assert browser.driver.page_load_timeout == 12
