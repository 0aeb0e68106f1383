# watir/elements/element.py
from __future__ import annotations

"""Element handle
-----------------
A lazy, relocatable reference to one DOM element. Nothing touches the wire
until an accessor needs the native element; stale natives are re-located from
the selector (when the policy allows) and a stale action is retried once.
"""

import weakref
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Type

from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
    NoSuchElementException,
    NoSuchWindowException,
    StaleElementReferenceException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webelement import WebElement

from watir.container import Container
from watir.exceptions import (
    ObjectDisabledError,
    ObjectReadOnlyError,
    UnknownObjectError,
    WaitTimeoutError,
    WatirError,
)
from watir.locators.locator import LocateStrategy
from watir.locators.selector_builder import SelectorBuilder
from watir.utils.config import get_settings
from watir.utils.logger import get_logger, log_with_context
from watir.utils.timing import Deadline, sleep
from watir.wait import Wait, Waitable

log = get_logger(__name__)

MAX_STALE_RETRIES = 1

_FIRE_EVENT_JS = """
var el = arguments[0], name = arguments[1].replace(/^on/, '');
var evt = new Event(name, {bubbles: true, cancelable: true});
el.dispatchEvent(evt);
"""


class LocateState(str, Enum):
    UNLOCATED = "unlocated"
    LOCATED = "located"
    STALE = "stale"


# ---------- Named attribute properties ----------

def attribute_property(attr: str, kind: type = str, doc: Optional[str] = None) -> property:
    """
    Build a read-only property reading one DOM attribute.

    kind=str  → value or ""
    kind=bool → attribute presence (an explicit "false" counts as absent)
    kind=int  → integer value or None
    """

    def getter(self: "Element") -> Any:
        value = self.attribute_value(attr)
        if kind is bool:
            return value is not None and str(value).lower() != "false"
        if kind is int:
            try:
                return int(value) if value not in (None, "") else None
            except (TypeError, ValueError):
                return None
        return "" if value is None else str(value)

    return property(getter, doc=doc or f"The '{attr}' attribute.")


class Element(Container, Waitable):
    """Base element handle. Subclasses narrow the tag, the builder and the named attributes."""

    DEFAULT_SELECTOR: Mapping[str, Any] = {}
    builder_class: Type[SelectorBuilder] = SelectorBuilder
    unknown_error: Type[UnknownObjectError] = UnknownObjectError

    id = attribute_property("id")
    class_name = attribute_property("class")
    title = attribute_property("title")
    lang = attribute_property("lang")
    dir = attribute_property("dir")

    def __init__(self, query_scope: Any, selector: Mapping[str, Any]) -> None:
        if not isinstance(selector, Mapping):
            raise TypeError(f"expected a mapping selector, got {selector!r}:{type(selector).__name__}")

        selector = dict(selector)
        native = selector.pop("element", None)

        self.query_scope = query_scope
        self.selector: Dict[str, Any] = selector
        self.keyword: Optional[str] = None
        self.collection_index: Optional[int] = None

        self._slot: Optional[int] = None
        self._finalizer: Optional[weakref.finalize] = None
        self._state = LocateState.UNLOCATED
        self._reset_by_staleness = False
        # wraps a native element with nothing to relocate it from
        self._native_only = native is not None and not selector

        if native is not None:
            self._store(native)

    # ---------- Scope plumbing ----------

    @property
    def browser(self):
        return self.query_scope.browser

    @property
    def driver(self):
        return self.browser.driver

    @property
    def _log(self):
        return log_with_context(log, keyword=self.keyword, element=type(self).__name__)

    @property
    def state(self) -> LocateState:
        return self._state

    @property
    def located(self) -> bool:
        return self._state is LocateState.LOCATED and self._native is not None

    @property
    def _native(self) -> Optional[WebElement]:
        return self.browser.references.fetch(self._slot)

    def _store(self, native: WebElement) -> None:
        self._release()
        table = self.browser.references
        self._slot = table.store(native)
        self._finalizer = weakref.finalize(self, table.discard, self._slot)
        self._state = LocateState.LOCATED

    def _release(self) -> None:
        if self._finalizer is not None:
            self._finalizer()
        self._finalizer = None
        self._slot = None

    def reset(self) -> None:
        """Forget the native element; the next access locates again."""
        self._release()
        self._state = LocateState.UNLOCATED

    def ensure_context(self) -> None:
        self.query_scope.ensure_child_context()

    def ensure_child_context(self) -> None:
        self.assert_exists()

    def search_context(self) -> WebElement:
        return self._native

    # ---------- Locating ----------

    @classmethod
    def build_strategy(cls, selector: Mapping[str, Any], multiple: bool = False) -> LocateStrategy:
        defaults = dict(cls.DEFAULT_SELECTOR)
        if "xpath" in selector or "css" in selector:
            defaults = {k: v for k, v in defaults.items() if k == "tag_name"}
        return cls.builder_class({**defaults, **selector}).build(multiple=multiple)

    def _relocatable(self) -> bool:
        return get_settings().ALWAYS_LOCATE and not self._native_only

    def locate(self) -> "Element":
        """Resolve the selector now; raises when nothing matches."""
        if self._native_only:
            raise self.unknown_error(f"element has no selector to relocate it from: {self!r}")
        strategy = self.build_strategy(self.selector)
        try:
            self.ensure_context()
            native = strategy.locate(self.query_scope.search_context())
        except NoSuchWindowException as e:
            raise self.unknown_error(f"window was closed, unable to locate element: {self!r}") from e
        if native is None:
            raise self.unknown_error(f"unable to locate element: {self!r}")
        self._log.debug(f"located {self!r} via {strategy}")
        self._store(native)
        self._reset_by_staleness = False
        return self

    @staticmethod
    def _stale_native(native: Optional[WebElement]) -> bool:
        if native is None:
            return True
        try:
            native.is_enabled()
            return False
        except (StaleElementReferenceException, NoSuchElementException, NoSuchWindowException):
            # NoSuchElement: the reference is not known in the current frame
            return True

    def assert_exists(self) -> None:
        if not self.located:
            self.locate()
            return

        if not self._stale_native(self._native):
            return
        try:
            self.ensure_context()
        except NoSuchWindowException as e:
            self.reset()
            raise self.unknown_error(f"window was closed: {self!r}") from e
        if not self._stale_native(self._native):
            return

        self._state = LocateState.STALE
        if self._relocatable():
            self._log.debug(f"relocating stale {self!r}")
            self.reset()
            self.locate()
            return

        self.reset()
        self._reset_by_staleness = True
        raise self.unknown_error(f"element located, but no longer exists: {self!r}")

    @property
    def exists(self) -> bool:
        try:
            self.assert_exists()
            return True
        except UnknownObjectError:
            return False

    @property
    def stale(self) -> bool:
        if self._native is None:
            raise WatirError(f"cannot check staleness of an element that was never located: {self!r}")
        self.ensure_context()
        return self._stale_native(self._native)

    @property
    def present(self) -> bool:
        try:
            self.assert_exists()
            return self._native.is_displayed()
        except UnknownObjectError:
            return False
        except StaleElementReferenceException:
            self.reset()
            return False

    @property
    def wd(self) -> WebElement:
        self.assert_exists()
        return self._native

    # ---------- Preconditions ----------

    def _timeout(self) -> float:
        return get_settings().DEFAULT_TIMEOUT

    def _wait_for_exists(self) -> None:
        if self.exists:
            return
        if self._reset_by_staleness and not get_settings().ALWAYS_LOCATE:
            raise self.unknown_error(f"element located, but no longer exists: {self!r}")

        self.query_scope._wait_for_exists()
        try:
            Wait.until(lambda: self.exists, message=f"waiting for {self!r} to be located")
        except WaitTimeoutError as e:
            raise self.unknown_error(
                f"timed out after {self._timeout():g} seconds, waiting for {self!r} to be located"
            ) from e

    def _wait_for_present(self) -> None:
        if self.present:
            return
        if self._reset_by_staleness and not get_settings().ALWAYS_LOCATE:
            raise self.unknown_error(f"element located, but no longer exists: {self!r}")

        self.query_scope._wait_for_present()
        try:
            Wait.until(lambda: self.present, message=f"waiting for {self!r} to become present")
        except WaitTimeoutError as e:
            raise self.unknown_error(
                f"element located, but timed out after {self._timeout():g} seconds, "
                f"waiting for {self!r} to be present"
            ) from e

    def _assert_enabled(self) -> None:
        if not self._native.is_enabled():
            raise ObjectDisabledError(f"object is disabled {self!r}")

    def _assert_writable(self) -> None:
        self._assert_enabled()
        if self._native.get_attribute("readonly") not in (None, "false"):
            raise ObjectReadOnlyError(f"object is read only {self!r}")

    def _present_and_enabled(self) -> None:
        self._wait_for_present()
        self._assert_enabled()

    def _present_and_writable(self) -> None:
        self._wait_for_present()
        self._assert_writable()

    # ---------- Wire calls ----------

    def _element_call(
        self,
        action: Callable[[WebElement], Any],
        precondition: Optional[Callable[[], None]] = None,
    ) -> Any:
        """
        Run `precondition`, then `action` with the native element.

        A stale native during the action resets the handle and re-runs both
        once when relocation is enabled; otherwise it surfaces as
        UnknownObjectError. An element that is not yet interactable is retried
        until the default timeout.
        """
        precondition = precondition or self._wait_for_exists
        retries = 0
        deadline = Deadline.after(self._timeout())

        while True:
            precondition()
            try:
                return action(self._native)
            except StaleElementReferenceException as e:
                retries += 1
                if not self._relocatable() or retries > MAX_STALE_RETRIES:
                    self.reset()
                    self._reset_by_staleness = True
                    raise self.unknown_error(f"element located, but no longer exists: {self!r}") from e
                self._log.debug(f"stale element during call on {self!r}, retrying ({retries}/{MAX_STALE_RETRIES})")
                self.reset()
            except NoSuchWindowException as e:
                self.reset()
                raise self.unknown_error(f"window was closed: {self!r}") from e
            except (ElementNotInteractableException, ElementClickInterceptedException) as e:
                if deadline.expired():
                    raise
                self._log.debug(f"{self!r} not interactable yet: {e.msg}")
                sleep(min(get_settings().POLL_INTERVAL, deadline.remaining()))

    # ---------- Reads ----------

    @property
    def text(self) -> str:
        return self._element_call(lambda n: n.text)

    @property
    def tag_name(self) -> str:
        return self._element_call(lambda n: n.tag_name.lower())

    @property
    def value(self) -> str:
        return self.attribute_value("value") or ""

    def attribute_value(self, name: str) -> Optional[str]:
        return self._element_call(lambda n: n.get_attribute(name))

    attribute = attribute_value

    @property
    def classes(self):
        return self.class_name.split()

    def style(self, prop: Optional[str] = None) -> str:
        if prop:
            return self._element_call(lambda n: n.value_of_css_property(prop))
        return (self.attribute_value("style") or "").strip()

    @property
    def outer_html(self) -> str:
        return self._element_call(lambda n: n.get_attribute("outerHTML"))

    html = outer_html

    @property
    def inner_html(self) -> str:
        return self._element_call(lambda n: n.get_attribute("innerHTML"))

    @property
    def visible(self) -> bool:
        return self._element_call(lambda n: n.is_displayed())

    @property
    def enabled(self) -> bool:
        return self._element_call(lambda n: n.is_enabled())

    @property
    def focused(self) -> bool:
        return self._element_call(lambda n: self.driver.switch_to.active_element == n)

    # ---------- Interactions ----------

    def click(self, *modifiers: str) -> "Element":
        def _click(native: WebElement) -> None:
            if not modifiers:
                native.click()
                return
            keys = [_modifier_key(m) for m in modifiers]
            chain = ActionChains(self.driver)
            for key in keys:
                chain.key_down(key)
            chain.click(native)
            for key in keys:
                chain.key_up(key)
            chain.perform()

        self._element_call(_click, self._present_and_enabled)
        return self

    def double_click(self) -> "Element":
        self._element_call(lambda n: ActionChains(self.driver).double_click(n).perform(), self._wait_for_present)
        return self

    def right_click(self) -> "Element":
        self._element_call(lambda n: ActionChains(self.driver).context_click(n).perform(), self._wait_for_present)
        return self

    def hover(self) -> "Element":
        self._element_call(lambda n: ActionChains(self.driver).move_to_element(n).perform(), self._wait_for_present)
        return self

    def drag_and_drop_on(self, other: "Element") -> "Element":
        other._wait_for_present()
        self._element_call(
            lambda n: ActionChains(self.driver).drag_and_drop(n, other.wd).perform(),
            self._wait_for_present,
        )
        return self

    def drag_and_drop_by(self, x_offset: int, y_offset: int) -> "Element":
        self._element_call(
            lambda n: ActionChains(self.driver).drag_and_drop_by_offset(n, x_offset, y_offset).perform(),
            self._wait_for_present,
        )
        return self

    def send_keys(self, *keys: str) -> "Element":
        self._element_call(lambda n: n.send_keys(*keys), self._present_and_writable)
        return self

    def focus(self) -> "Element":
        self._element_call(lambda n: self.driver.execute_script("return arguments[0].focus()", n))
        return self

    def fire_event(self, name: str) -> "Element":
        self._element_call(lambda n: self.driver.execute_script(_FIRE_EVENT_JS, n, name))
        return self

    def scroll_into_view(self) -> "Element":
        self._element_call(lambda n: self.driver.execute_script("arguments[0].scrollIntoView(true);", n))
        return self

    def flash(self, color: str = "red", flashes: int = 5, delay: float = 0.1) -> "Element":
        original = self.style("background-color")
        script = "arguments[0].style.backgroundColor = arguments[1];"
        for i in range(flashes * 2):
            shade = color if i % 2 == 0 else original
            self._element_call(lambda n, c=shade: self.driver.execute_script(script, n, c))
            sleep(delay)
        return self

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.browser.execute_script(script, *args)

    # ---------- Adjacency ----------

    def parent(self, tag_name: Optional[str] = None) -> "Element":
        from watir.elements.html_elements import HTMLElement

        if tag_name:
            xpath = f"./ancestor::*[local-name()='{tag_name.lower()}'][1]"
        else:
            xpath = "./parent::*"
        return HTMLElement(self, {"xpath": xpath})

    def previous_sibling(self) -> "Element":
        from watir.elements.html_elements import HTMLElement

        return HTMLElement(self, {"xpath": "./preceding-sibling::*[1]"})

    def following_sibling(self) -> "Element":
        from watir.elements.html_elements import HTMLElement

        return HTMLElement(self, {"xpath": "./following-sibling::*[1]"})

    def children(self):
        from watir.elements.collection import ElementCollection
        from watir.elements.html_elements import HTMLElement

        return ElementCollection(self, {"xpath": "./*"}, HTMLElement)

    # ---------- Subtype ----------

    def to_subtype(self) -> "Element":
        """Re-wrap the same native element in the class registered for its tag/type."""
        from watir.elements.registry import resolve_element_class

        native = self.wd
        tag = native.tag_name.lower()
        type_attribute = native.get_attribute("type") if tag == "input" else None
        cls = resolve_element_class(tag, type_attribute)
        element = cls(self.query_scope, {**self.selector, "element": native})
        element.keyword = self.keyword
        element.collection_index = self.collection_index
        return element

    # ---------- Identity ----------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        if not (self.exists and other.exists):
            return False
        return self._native == other._native

    # equality follows the located native, which changes on relocation
    __hash__ = None

    def selector_string(self) -> str:
        own = "{element: (native)}" if self._native_only else repr(self.selector)
        parent = self.query_scope
        if isinstance(parent, Element):
            return f"{parent.selector_string()} --> {own}"
        return own

    def __repr__(self) -> str:
        keyword = f" keyword={self.keyword}" if self.keyword else ""
        return f"<{type(self).__name__}{keyword} located={self.located} selector={self.selector_string()}>"


def _modifier_key(name: str) -> str:
    key = getattr(Keys, str(name).upper(), None)
    return key if isinstance(key, str) else name
