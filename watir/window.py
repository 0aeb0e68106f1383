# watir/window.py
from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from selenium.common.exceptions import NoSuchWindowException, WebDriverException

from watir.exceptions import NoMatchingWindowFoundError
from watir.utils.logger import get_logger
from watir.wait import Waitable

log = get_logger(__name__)


def _text_matches(matcher: Any, value: str) -> bool:
    if isinstance(matcher, re.Pattern):
        return matcher.search(value) is not None
    return value == matcher


class _WindowLookup:
    """Title/url/element matching shared by Window and WindowCollection."""

    VALID_KEYS: frozenset = frozenset()

    browser: Any
    selector: Dict[str, Any]

    def _check_keys(self, selector: Dict[str, Any]) -> None:
        invalid = set(selector) - self.VALID_KEYS
        if invalid:
            raise ValueError(f"invalid window selector: {selector!r}")

    @contextmanager
    def _inside(self, handle: str) -> Iterator[None]:
        """Temporarily switch the driver to `handle`, then back to where it was."""
        driver = self.browser.driver
        try:
            previous: Optional[str] = driver.current_window_handle
        except NoSuchWindowException:
            previous = None
        driver.switch_to.window(handle)
        try:
            yield
        finally:
            if previous and previous != handle and previous in driver.window_handles:
                driver.switch_to.window(previous)
            self.browser.default_context = True

    def _matches(self, handle: str) -> bool:
        keys = {"title", "url", "element"} & set(self.selector)
        if not keys:
            return True
        try:
            with self._inside(handle):
                driver = self.browser.driver
                if "title" in keys and not _text_matches(self.selector["title"], driver.title):
                    return False
                if "url" in keys and not _text_matches(self.selector["url"], driver.current_url):
                    return False
                if "element" in keys and not self.selector["element"].exists:
                    return False
                return True
        except NoSuchWindowException:
            # the window closed while we were looking at it
            return False


class Window(_WindowLookup, Waitable):
    """
    A browser window or tab, found by `handle`, `title`, `url`, `index` or
    `element`. With no selector it refers to the window current at creation.
    """

    VALID_KEYS = frozenset({"handle", "title", "url", "index", "element"})

    def __init__(self, browser: Any, **selector: Any) -> None:
        self._check_keys(selector)
        self.browser = browser
        self.selector = selector
        self._handle: Optional[str] = selector.get("handle")

        if not selector:
            try:
                self._handle = browser.driver.current_window_handle
            except NoSuchWindowException:
                self._handle = None

    # ---------- Locating ----------

    def _locate(self) -> Optional[str]:
        handles: List[str] = self.browser.driver.window_handles
        if "index" in self.selector:
            index = self.selector["index"]
            return handles[index] if -len(handles) <= index < len(handles) else None
        for handle in handles:
            if self._matches(handle):
                return handle
        return None

    @property
    def handle(self) -> str:
        if self._handle is None and self.selector and "handle" not in self.selector:
            self._handle = self._locate()
        if self._handle is None:
            raise NoMatchingWindowFoundError(f"unable to locate window using {self.selector!r}")
        return self._handle

    @property
    def exists(self) -> bool:
        try:
            return self.handle in self.browser.driver.window_handles
        except NoMatchingWindowFoundError:
            return False

    present = exists

    @property
    def is_current(self) -> bool:
        try:
            return self.exists and self.browser.driver.current_window_handle == self.handle
        except NoSuchWindowException:
            return False

    # ---------- Reads (do not change the current window) ----------

    def _read(self, attr: str) -> str:
        if not self.exists:
            raise NoMatchingWindowFoundError(f"unable to locate window using {self.selector!r}")
        with self._inside(self.handle):
            return getattr(self.browser.driver, attr)

    @property
    def title(self) -> str:
        return self._read("title")

    @property
    def url(self) -> str:
        return self._read("current_url")

    # ---------- Actions ----------

    def use(self) -> "Window":
        """Make this the current window."""
        if not self.exists:
            raise NoMatchingWindowFoundError(f"unable to locate window using {self.selector!r}")
        self.browser.driver.switch_to.window(self.handle)
        self.browser.default_context = True
        log.debug(f"switched to window {self.handle}")
        return self

    def close(self) -> None:
        driver = self.browser.driver
        handle = self.handle
        try:
            current: Optional[str] = driver.current_window_handle
        except NoSuchWindowException:
            current = None
        driver.switch_to.window(handle)
        driver.close()
        log.debug(f"closed window {handle}")
        if current and current != handle and current in driver.window_handles:
            driver.switch_to.window(current)
        self.browser.default_context = True

    def __enter__(self) -> "Window":
        try:
            self._return_to: Optional[str] = self.browser.driver.current_window_handle
        except NoSuchWindowException:
            self._return_to = None
        return self.use()

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            handles = self.browser.driver.window_handles
        except WebDriverException:
            return
        if self._return_to and self._return_to in handles:
            self.browser.driver.switch_to.window(self._return_to)
            self.browser.default_context = True

    # ---------- Identity ----------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Window):
            return NotImplemented
        if not (self.exists and other.exists):
            return False
        return self.handle == other.handle

    def __hash__(self) -> int:
        return hash(self._handle)

    def __repr__(self) -> str:
        return f"<Window handle={self._handle!r} selector={self.selector!r}>"


class WindowCollection(_WindowLookup, Waitable):
    """Windows matching a title/url/element selector; re-queried on every iteration."""

    VALID_KEYS = frozenset({"title", "url", "element"})

    def __init__(self, browser: Any, **selector: Any) -> None:
        self._check_keys(selector)
        self.browser = browser
        self.selector = selector
        self._windows: Optional[List[Window]] = None

    def to_list(self) -> List[Window]:
        if self._windows is None:
            handles = self.browser.driver.window_handles
            self._windows = [Window(self.browser, handle=h) for h in handles if self._matches(h)]
        return self._windows

    def reset(self) -> None:
        self._windows = None

    def __iter__(self) -> Iterator[Window]:
        self.reset()
        return iter(self.to_list())

    def __len__(self) -> int:
        self.reset()
        return len(self.to_list())

    def __getitem__(self, index: int) -> Window:
        return self.to_list()[index]

    @property
    def first(self) -> Window:
        return self[0]

    @property
    def last(self) -> Window:
        return self[-1]

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def exists(self) -> bool:
        return not self.is_empty

    present = exists

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WindowCollection):
            return NotImplemented
        return self.to_list() == other.to_list()

    __hash__ = None

    def __repr__(self) -> str:
        return f"<WindowCollection selector={self.selector!r}>"
