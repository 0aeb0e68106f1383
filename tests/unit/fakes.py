# tests/unit/fakes.py
"""
In-memory stand-in for a Selenium WebDriver session.

Pages are lxml HTML trees; XPath is evaluated by lxml and CSS is translated
with cssselect, so the queries the locators build run for real. Elements go
stale when their node is detached from the document, or when the driver is
pointed at a different document (another frame or window).
"""
from __future__ import annotations

import itertools
import re
from collections import Counter
from typing import Any, Callable, Dict, List, Optional, Tuple

import lxml.html
from cssselect import HTMLTranslator
from lxml import etree
from selenium.common.exceptions import (
    NoSuchElementException,
    NoSuchFrameException,
    NoSuchWindowException,
    StaleElementReferenceException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

_CSS = HTMLTranslator()
_BOOLEAN_ATTRIBUTES = {"checked", "selected", "disabled", "readonly", "multiple", "required", "hidden", "autofocus"}

BLANK = "<html><head><title></title></head><body></body></html>"


def parse(html: str):
    return lxml.html.document_fromstring(html)


def _style(node) -> Dict[str, str]:
    out = {}
    for decl in (node.get("style") or "").split(";"):
        if ":" in decl:
            k, v = decl.split(":", 1)
            out[k.strip().lower()] = v.strip().lower()
    return out


def _displayed(node) -> bool:
    if node.tag == "input" and (node.get("type") or "").lower() == "hidden":
        return False
    while node is not None:
        style = _style(node)
        if node.get("hidden") is not None or style.get("display") == "none" or style.get("visibility") == "hidden":
            return False
        node = node.getparent()
    return True


def _visible_text(node) -> str:
    parts: List[str] = []

    def walk(n) -> None:
        if not isinstance(n.tag, str) or n.tag in ("script", "style", "head", "title"):
            return
        if not _displayed(n):
            return
        if n.text:
            parts.append(n.text)
        for child in n:
            walk(child)
            if child.tail:
                parts.append(child.tail)

    walk(node)
    return re.sub(r"\s+", " ", "".join(parts)).strip()


class FakeWindow:
    def __init__(self, html: str, url: str) -> None:
        self.root = parse(html)
        self.url = url
        self.history: List[Tuple[str, str]] = []


class FakeElement(WebElement):
    def __init__(self, driver: "FakeDriver", node, root) -> None:
        super().__init__(driver, driver.element_id(node))
        self.node = node
        self.root = root

    # ---------- liveness ----------

    def _check(self) -> None:
        self._parent.calls["element_command"] += 1
        top = self.node
        while top.getparent() is not None:
            top = top.getparent()
        if top is not self.root or self.root is not self._parent.current_root():
            raise StaleElementReferenceException("stale element reference: element is not attached to the page document")

    # ---------- reads ----------

    @property
    def tag_name(self) -> str:
        self._check()
        return self.node.tag.lower()

    @property
    def text(self) -> str:
        self._check()
        return _visible_text(self.node)

    def get_attribute(self, name: str) -> Optional[str]:
        self._check()
        node = self.node
        if name == "outerHTML":
            return etree.tostring(node, encoding=str, with_tail=False, method="html")
        if name == "innerHTML":
            inner = node.text or ""
            return inner + "".join(etree.tostring(c, encoding=str, method="html") for c in node)
        if name == "value" and node.tag == "textarea":
            return node.text or ""
        if name == "value" and node.tag == "option" and node.get("value") is None:
            return _visible_text(node)
        if name in _BOOLEAN_ATTRIBUTES:
            return "true" if node.get(name) is not None else None
        return node.get(name)

    def get_dom_attribute(self, name: str) -> Optional[str]:
        self._check()
        return self.node.get(name)

    def is_displayed(self) -> bool:
        self._check()
        return _displayed(self.node)

    def is_enabled(self) -> bool:
        self._check()
        self._parent.calls["is_enabled"] += 1
        return self.node.get("disabled") is None

    def is_selected(self) -> bool:
        self._check()
        attr = "selected" if self.node.tag == "option" else "checked"
        return self.node.get(attr) is not None

    def value_of_css_property(self, name: str) -> str:
        self._check()
        return _style(self.node).get(name, "")

    @property
    def size(self) -> dict:
        self._check()
        return {"width": int(self.node.get("width") or 0), "height": int(self.node.get("height") or 0)}

    # ---------- actions ----------

    def click(self) -> None:
        self._check()
        node = self.node
        self._parent.clicked.append(node.get("id") or node.tag)
        if node.get("disabled") is not None:
            return
        kind = (node.get("type") or "").lower()
        if node.tag == "input" and kind == "checkbox":
            self._toggle(node, "checked")
        elif node.tag == "input" and kind == "radio":
            for other in self.root.iter("input"):
                if other.get("name") == node.get("name") and other.get("type") == "radio":
                    other.attrib.pop("checked", None)
            node.set("checked", "checked")
        elif node.tag == "option":
            select = next((a for a in node.iterancestors("select")), None)
            if select is not None and select.get("multiple") is not None:
                self._toggle(node, "selected")
            else:
                if select is not None:
                    for opt in select.iter("option"):
                        opt.attrib.pop("selected", None)
                node.set("selected", "selected")
        handler = self._parent.on_click.get(node.get("id"))
        if handler:
            handler(self._parent)

    @staticmethod
    def _toggle(node, attr: str) -> None:
        if node.get(attr) is None:
            node.set(attr, attr)
        else:
            node.attrib.pop(attr)

    def send_keys(self, *value: str) -> None:
        self._check()
        text = "".join(value)
        if self.node.tag == "textarea":
            self.node.text = (self.node.text or "") + text
        else:
            self.node.set("value", (self.node.get("value") or "") + text)
        self._parent.typed.append(text)

    def clear(self) -> None:
        self._check()
        if self.node.tag == "textarea":
            self.node.text = ""
        else:
            self.node.set("value", "")

    def submit(self) -> None:
        self._check()
        self._parent.submitted.append(self.node.get("id") or self.node.tag)

    # ---------- search ----------

    def find_element(self, by: str = By.ID, value: Optional[str] = None) -> "FakeElement":
        self._check()
        return self._parent._find_one(self.node, self.root, by, value, relative=True)

    def find_elements(self, by: str = By.ID, value: Optional[str] = None) -> List["FakeElement"]:
        self._check()
        return self._parent._find_all(self.node, self.root, by, value, relative=True)


class _SwitchTo:
    def __init__(self, driver: "FakeDriver") -> None:
        self._driver = driver

    @property
    def active_element(self) -> FakeElement:
        d = self._driver
        if d.active is not None:
            return d.active
        return d.find_element(By.TAG_NAME, "body")

    def frame(self, frame_reference: Any) -> None:
        d = self._driver
        d.calls["switch_frame"] += 1
        if not isinstance(frame_reference, FakeElement):
            raise NoSuchFrameException(f"no such frame: {frame_reference!r}")
        frame_reference._check()
        node = frame_reference.node
        if node.tag not in ("iframe", "frame"):
            raise NoSuchFrameException(f"element is not a frame: {node.tag}")
        d.frames.append(d.frame_root(node))

    def default_content(self) -> None:
        self._driver.calls["default_content"] += 1
        self._driver.frames.clear()

    def parent_frame(self) -> None:
        if self._driver.frames:
            self._driver.frames.pop()

    def window(self, handle: str) -> None:
        d = self._driver
        if handle not in d.windows:
            raise NoSuchWindowException(f"no such window: {handle}")
        d.current = handle
        d.frames.clear()


class FakeDriver:
    """Selenium-shaped driver over lxml documents."""

    def __init__(self, html: str = BLANK, url: str = "about:blank", pages: Optional[Dict[str, str]] = None) -> None:
        self._handles = (f"window-{n}" for n in itertools.count(1))
        self._ids: Dict[Any, str] = {}
        self._id_counter = itertools.count(1)
        self._frame_roots: Dict[Any, Any] = {}
        self.pages: Dict[str, str] = dict(pages or {})
        self.windows: Dict[str, FakeWindow] = {}
        self.current: Optional[str] = None
        self.frames: List[Any] = []
        self.active: Optional[FakeElement] = None
        self.calls: Counter = Counter()
        self.clicked: List[str] = []
        self.typed: List[str] = []
        self.submitted: List[str] = []
        self.scripts: List[Tuple[str, tuple]] = []
        self.script_handlers: List[Tuple[str, Callable[..., Any]]] = []
        self.on_click: Dict[str, Callable[["FakeDriver"], None]] = {}
        self.quit_called = False
        self.session_id = "fake-session"
        self.page_load_timeout: Optional[float] = None
        self.switch_to = _SwitchTo(self)
        self.current = self.open_window(html, url)

    # ---------- bookkeeping ----------

    def element_id(self, node) -> str:
        if node not in self._ids:
            self._ids[node] = f"fake-{next(self._id_counter)}"
        return self._ids[node]

    def frame_root(self, node):
        if node not in self._frame_roots:
            self._frame_roots[node] = parse(node.get("srcdoc") or BLANK)
        return self._frame_roots[node]

    def _window(self) -> FakeWindow:
        if self.current not in self.windows:
            raise NoSuchWindowException("no such window: target window already closed")
        return self.windows[self.current]

    def current_root(self):
        return self.frames[-1] if self.frames else self._window().root

    def open_window(self, html: str, url: str = "about:blank") -> str:
        handle = next(self._handles)
        self.windows[handle] = FakeWindow(html, url)
        return handle

    def load(self, html: str) -> None:
        """Replace the current window's document, making every element stale."""
        self._window().root = parse(html)
        self.frames.clear()

    def remove(self, xpath: str) -> None:
        for node in self.current_root().xpath(xpath):
            node.getparent().remove(node)

    # ---------- search ----------

    def _query(self, node, by: str, value: str, relative: bool) -> List[Any]:
        if by == By.XPATH:
            xpath = value
        elif by == By.CSS_SELECTOR:
            xpath = _CSS.css_to_xpath(value, prefix="descendant::" if relative else "descendant-or-self::")
        elif by == By.TAG_NAME:
            xpath = f".//{value}" if relative else f"descendant-or-self::{value}"
        elif by == By.ID:
            xpath = f".//*[@id='{value}']"
        else:
            raise NotImplementedError(by)
        try:
            found = node.xpath(xpath)
        except etree.XPathError as e:
            from selenium.common.exceptions import InvalidSelectorException

            raise InvalidSelectorException(f"invalid selector: {value}: {e}") from e
        return [n for n in found if isinstance(n, etree._Element) and isinstance(n.tag, str)]

    def _find_all(self, node, root, by: str, value: str, relative: bool = False) -> List[FakeElement]:
        self.calls["find_elements"] += 1
        return [FakeElement(self, n, root) for n in self._query(node, by, value, relative)]

    def _find_one(self, node, root, by: str, value: str, relative: bool = False) -> FakeElement:
        self.calls["find_element"] += 1
        found = self._query(node, by, value, relative)
        if not found:
            raise NoSuchElementException(f"no such element: {by}={value}")
        return FakeElement(self, found[0], root)

    def find_element(self, by: str = By.ID, value: Optional[str] = None) -> FakeElement:
        root = self.current_root()
        return self._find_one(root, root, by, value)

    def find_elements(self, by: str = By.ID, value: Optional[str] = None) -> List[FakeElement]:
        root = self.current_root()
        return self._find_all(root, root, by, value)

    # ---------- session ----------

    @property
    def window_handles(self) -> List[str]:
        return list(self.windows)

    @property
    def current_window_handle(self) -> str:
        self._window()
        return self.current

    @property
    def title(self) -> str:
        titles = self._window().root.xpath("//title")
        return titles[0].text_content().strip() if titles else ""

    @property
    def current_url(self) -> str:
        return self._window().url

    @property
    def page_source(self) -> str:
        return etree.tostring(self._window().root, encoding=str, method="html")

    def get(self, url: str) -> None:
        window = self._window()
        window.history.append((window.url, etree.tostring(window.root, encoding=str, method="html")))
        window.url = url
        window.root = parse(self.pages.get(url, BLANK))
        self.frames.clear()

    def refresh(self) -> None:
        self.calls["refresh"] += 1

    def back(self) -> None:
        window = self._window()
        if window.history:
            window.url, html = window.history.pop()
            window.root = parse(html)

    def forward(self) -> None:
        self.calls["forward"] += 1

    def set_page_load_timeout(self, seconds: float) -> None:
        self.page_load_timeout = seconds

    def execute_script(self, script: str, *args: Any) -> Any:
        self.scripts.append((script, args))
        for needle, handler in self.script_handlers:
            if needle in script:
                return handler(*args)
        if "document.readyState" in script:
            return "complete"
        if "focus()" in script and args:
            self.active = args[0]
            return None
        if "document.documentElement.outerHTML" in script:
            return etree.tostring(self.current_root(), encoding=str, method="html")
        return None

    def close(self) -> None:
        self._window()
        del self.windows[self.current]
        self.frames.clear()

    def quit(self) -> None:
        self.quit_called = True
        self.windows.clear()
