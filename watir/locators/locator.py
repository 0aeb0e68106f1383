# watir/locators/locator.py
from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Callable, Iterator, List, Optional, Tuple

from selenium.common.exceptions import NoSuchElementException, StaleElementReferenceException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

from watir.exceptions import InvalidSelectorError
from watir.utils.logger import get_logger

log = get_logger(__name__)

_BY = {"xpath": By.XPATH, "css": By.CSS_SELECTOR}


@dataclass(frozen=True)
class Filter:
    """A named in-process predicate applied to candidate elements."""
    name: str
    test: Callable[[WebElement], bool] = field(compare=False)

    def __call__(self, element: WebElement) -> bool:
        return bool(self.test(element))


@dataclass(frozen=True)
class LocateStrategy:
    """
    Resolved lookup for one selector.

    how:     "xpath" | "css"
    what:    the query string
    filters: in-process predicates; empty when the query alone decides
    index:   position applied after filtering (None when pushed into the query)
    """
    how: str
    what: str
    filters: Tuple[Filter, ...] = ()
    index: Optional[int] = None

    @property
    def by(self) -> str:
        return _BY[self.how]

    @property
    def pushdown(self) -> bool:
        return not self.filters and self.index is None

    # ---------- Lookup ----------

    def locate(self, context: Any) -> Optional[WebElement]:
        """First match (or the indexed one) under `context`, or None."""
        if self.pushdown:
            try:
                return context.find_element(self.by, self.what)
            except NoSuchElementException:
                return None

        idx = self.index or 0
        candidates = self._filtered(context)
        if idx >= 0:
            return next(islice(candidates, idx, None), None)

        found: List[WebElement] = list(candidates)
        try:
            return found[idx]
        except IndexError:
            return None

    def locate_all(self, context: Any) -> Iterator[WebElement]:
        """Lazily yield every match. Each call issues a fresh query."""
        if self.index is not None:
            raise InvalidSelectorError("index is not a valid selector for a collection")
        return self._filtered(context)

    def _filtered(self, context: Any) -> Iterator[WebElement]:
        for element in context.find_elements(self.by, self.what):
            if self._accepts(element):
                yield element

    def _accepts(self, element: WebElement) -> bool:
        try:
            return all(f(element) for f in self.filters)
        except StaleElementReferenceException:
            log.debug(f"candidate went stale while filtering {self.what!r}")
            return False

    def __str__(self) -> str:
        parts = [f"{self.how}={self.what!r}"]
        if self.filters:
            parts.append("filters=[" + ", ".join(f.name for f in self.filters) + "]")
        if self.index is not None:
            parts.append(f"index={self.index}")
        return "LocateStrategy(" + ", ".join(parts) + ")"
