# watir/browser.py
from __future__ import annotations

"""Browser
----------
Top-level scope wrapping a Selenium WebDriver. Owns the reference table for
every element located through it and tracks whether the driver is pointed
at the top-level document or inside a frame.
"""

import re
from typing import Any, Optional

from selenium import webdriver
from selenium.common.exceptions import NoSuchWindowException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

from watir.container import Container
from watir.exceptions import WatirError
from watir.references import ReferenceTable
from watir.utils.config import BrowserName, Settings, get_settings
from watir.utils.logger import get_logger
from watir.utils.timing import measure
from watir.wait import Wait, Waitable
from watir.window import Window, WindowCollection

log = get_logger(__name__)

# "host:port" has no scheme; only "scheme://" and the opaque browser schemes do
_SCHEME = re.compile(r"^(?:[a-z][a-z0-9+.\-]*://|(?:about|data|javascript|blob):)", re.IGNORECASE)


# ---------- Driver factory ----------

def _options_for(name: BrowserName, settings: Settings):
    if name == BrowserName.firefox:
        options = webdriver.FirefoxOptions()
    elif name == BrowserName.edge:
        options = webdriver.EdgeOptions()
    elif name == BrowserName.safari:
        options = webdriver.SafariOptions()
    else:
        options = webdriver.ChromeOptions()
    for arg in settings.browser_arguments():
        options.add_argument(arg)
    return options


def new_driver(name: Optional[str] = None, settings: Optional[Settings] = None):
    """Start a WebDriver session from settings; `name` overrides WATIR_BROWSER."""
    s = settings or get_settings()
    browser_name = BrowserName(name.lower()) if name else s.BROWSER

    log.info(f"starting {browser_name.value} (headless={s.HEADLESS})")
    if browser_name == BrowserName.remote:
        driver = webdriver.Remote(command_executor=s.REMOTE_URL, options=_options_for(BrowserName.chrome, s))
    elif browser_name == BrowserName.firefox:
        driver = webdriver.Firefox(options=_options_for(browser_name, s))
    elif browser_name == BrowserName.edge:
        driver = webdriver.Edge(options=_options_for(browser_name, s))
    elif browser_name == BrowserName.safari:
        driver = webdriver.Safari(options=_options_for(browser_name, s))
    else:
        driver = webdriver.Chrome(options=_options_for(browser_name, s))

    driver.set_page_load_timeout(s.PAGE_LOAD_TIMEOUT)
    return driver


# ---------- Browser ----------

class Browser(Container, Waitable):
    """
    Entry point of the DSL.

        browser = Browser()                 # new driver from settings
        browser = Browser(driver=existing)  # wrap a running session
        browser.goto("example.com")
        browser.button(text="Submit").click()
    """

    def __init__(self, browser: Optional[str] = None, driver: Any = None) -> None:
        self.driver = driver if driver is not None else new_driver(browser)
        self.references = ReferenceTable()
        self.default_context = True
        self._closed = False
        try:
            self._original_handle: Optional[str] = self.driver.current_window_handle
        except WebDriverException:
            self._original_handle = None

    @classmethod
    def start(cls, url: str, browser: Optional[str] = None) -> "Browser":
        b = cls(browser=browser)
        b.goto(url)
        return b

    # ---------- Scope ----------

    @property
    def browser(self) -> "Browser":
        return self

    @property
    def closed(self) -> bool:
        return self._closed

    def ensure_context(self) -> None:
        """Raise when closed; otherwise point the driver back at the top-level document."""
        if self._closed:
            raise WatirError("browser was closed")
        if not self.default_context:
            log.debug("switching to default content")
            self.driver.switch_to.default_content()
            self.default_context = True

    ensure_child_context = ensure_context

    def search_context(self) -> Any:
        return self.driver

    def _wait_for_exists(self) -> None:
        if self._closed:
            raise WatirError("browser was closed")

    _wait_for_present = _wait_for_exists

    @property
    def exists(self) -> bool:
        if self._closed:
            return False
        try:
            return self.driver.current_window_handle in self.driver.window_handles
        except NoSuchWindowException:
            return False

    present = exists

    # ---------- Navigation ----------

    @measure("goto", level="DEBUG")
    def goto(self, url: str) -> str:
        if self._closed:
            raise WatirError("browser was closed")
        if not _SCHEME.match(url):
            url = f"http://{url}"
        log.debug(f"goto {url}")
        self.driver.get(url)
        self.default_context = True
        return url

    def refresh(self) -> None:
        self.ensure_context()
        self.driver.refresh()

    def back(self) -> None:
        self.ensure_context()
        self.driver.back()

    def forward(self) -> None:
        self.ensure_context()
        self.driver.forward()

    @property
    def url(self) -> str:
        self.ensure_context()
        return self.driver.current_url

    @property
    def title(self) -> str:
        self.ensure_context()
        return self.driver.title

    @property
    def text(self) -> str:
        self.ensure_context()
        return self.driver.find_element(By.TAG_NAME, "body").text

    @property
    def html(self) -> str:
        self.ensure_context()
        return self.driver.page_source

    @property
    def ready_state(self) -> str:
        return self.execute_script("return document.readyState")

    def wait(self, timeout: float = 5) -> "Browser":
        """Block until document.readyState is complete."""
        Wait.until(lambda: self.ready_state == "complete", timeout=timeout,
                   message="waiting for document.readyState == 'complete'")
        return self

    def send_keys(self, *keys: str) -> None:
        self.ensure_context()
        self.driver.switch_to.active_element.send_keys(*keys)

    # ---------- Scripts ----------

    def execute_script(self, script: str, *args: Any) -> Any:
        self.ensure_context()
        return self.run_script(script, *args)

    def run_script(self, script: str, *args: Any, scope: Any = None) -> Any:
        """Execute in whatever context the driver is in; element results come back as handles."""
        native_args = [_unwrap(a) for a in args]
        result = self.driver.execute_script(script, *native_args)
        return self._wrap(result, scope or self)

    def _wrap(self, value: Any, scope: Any) -> Any:
        from watir.elements.html_elements import HTMLElement

        if isinstance(value, WebElement):
            return HTMLElement(scope, {"element": value}).to_subtype()
        if isinstance(value, list):
            return [self._wrap(v, scope) for v in value]
        if isinstance(value, dict):
            return {k: self._wrap(v, scope) for k, v in value.items()}
        return value

    # ---------- Windows ----------

    def windows(self, **selector: Any) -> WindowCollection:
        return WindowCollection(self, **selector)

    def window(self, **selector: Any) -> Window:
        return Window(self, **selector)

    @property
    def original_window(self) -> Window:
        if self._original_handle is None:
            return Window(self)
        return Window(self, handle=self._original_handle)

    def switch_window(self) -> Window:
        """Switch to the first window that is not the current one."""
        current = self.window()
        found = Wait.until(
            lambda: next((w for w in self.windows() if w != current), None),
            message="waiting for another window to open",
        )
        return found.use()

    # ---------- Lifecycle ----------

    def close(self) -> None:
        if self._closed:
            return
        log.debug("closing browser")
        try:
            self.driver.quit()
        finally:
            self.references.clear()
            self._closed = True

    quit = close

    def __enter__(self) -> "Browser":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        if self._closed:
            return "<Browser closed>"
        try:
            return f"<Browser url={self.driver.current_url!r} title={self.driver.title!r}>"
        except WebDriverException:
            return "<Browser>"


def _unwrap(value: Any) -> Any:
    from watir.elements.element import Element

    if isinstance(value, Element):
        return value.wd
    if isinstance(value, (list, tuple)):
        return [_unwrap(v) for v in value]
    if isinstance(value, dict):
        return {k: _unwrap(v) for k, v in value.items()}
    return value
