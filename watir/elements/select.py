# watir/elements/select.py
from __future__ import annotations

import re
from typing import Any, List, Optional, Union

from watir.elements.element import attribute_property
from watir.elements.html_elements import HTMLElement
from watir.exceptions import (
    NoValueFoundError,
    ObjectDisabledError,
    UnknownObjectError,
    WaitTimeoutError,
    WatirError,
)
from watir.utils.logger import get_logger
from watir.wait import Wait

log = get_logger(__name__)

Matcher = Union[str, int, float, "re.Pattern[str]"]


class Option(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "option"}

    disabled = attribute_property("disabled", bool)

    def select(self) -> "Option":
        """Choose this option (clicks only when not already selected)."""
        if not self.selected:
            self.click()
        return self

    def clear(self) -> "Option":
        if self.selected:
            self.click()
        return self

    @property
    def selected(self) -> bool:
        return self._element_call(lambda n: n.is_selected())

    @property
    def label(self) -> str:
        """The label attribute, falling back to the option text."""
        return self.attribute_value("label") or self.text


class Select(HTMLElement):
    """<select>; `select_list` is an alias accessor."""

    DEFAULT_SELECTOR = {"tag_name": "select"}

    name = attribute_property("name")
    disabled = attribute_property("disabled", bool)
    multiple = attribute_property("multiple", bool)

    # ---------- Reading ----------

    def options(self, **selector: Any):
        from watir.elements.collection import ElementCollection

        return ElementCollection(self, selector, Option)

    @property
    def selected_options(self) -> List[Option]:
        return [opt for opt in self.options() if opt.selected]

    @property
    def value(self) -> Optional[str]:
        """Value of the first selected option, or None."""
        selected = self.selected_options
        return selected[0].value if selected else None

    @property
    def text(self) -> Optional[str]:
        """Text of the first selected option, or None."""
        selected = self.selected_options
        return selected[0].text if selected else None

    def include(self, value: Matcher) -> bool:
        """True when an option's text, label or value matches."""
        value = _normalize(value)
        return (
            self.option(text=value).exists
            or self.option(label=value).exists
            or self.option(value=value).exists
        )

    def is_selected(self, value: Matcher) -> bool:
        value = _normalize(value)
        by_text = self.options(text=value)
        if any(opt.selected for opt in by_text):
            return True
        by_label = self.options(label=value)
        if any(opt.selected for opt in by_label):
            return True
        if len(by_text) + len(by_label) == 0:
            raise UnknownObjectError(f"unable to locate option matching {value!r}")
        return False

    # ---------- Changing ----------

    def select(self, *values: Matcher, text: Any = None, value: Any = None, label: Any = None) -> str:
        """
        Select option(s) by text, label or value.

        Positional values match value, then text, then label. Pass several
        values (or a list to a keyword) to select more than one on a
        multi-select. Returns the text of the first option selected.

        Raises:
            NoValueFoundError when no option matches
            ObjectDisabledError when the matching option is disabled
        """
        selection = {
            "value_or_text": list(values),
            "text": text,
            "value": value,
            "label": label,
        }
        selection = {k: v for k, v in selection.items() if v is not None and v != []}
        if len(selection) > 1:
            raise WatirError(f"can not select by more than one method: {selection!r}")
        if not selection:
            raise TypeError("select() needs a value to select")

        how, what = next(iter(selection.items()))
        wanted = what if isinstance(what, (list, tuple)) else [what]
        if not wanted:
            raise TypeError(f"expected str, number or pattern, got {what!r}")

        results = [self._select_by(how, _normalize(v)) for v in wanted]
        return results[0]

    def clear(self) -> "Select":
        if not self.multiple:
            raise WatirError("you can only clear multi-selects")
        for opt in self.selected_options:
            opt.click()
        return self

    def _find_options(self, how: str, what: Matcher) -> List[Option]:
        order = ("value", "text", "label") if how == "value_or_text" else (how,)
        found: List[Option] = []

        def _empty() -> bool:
            nonlocal found
            for key in order:
                found = list(self.options(**{key: what}))
                if found:
                    return False
            return True

        try:
            Wait.while_(_empty, message=f"waiting for option {what!r} in {self!r}")
        except WaitTimeoutError:
            pass
        if not found:
            raise NoValueFoundError(f"{what!r} not found in {self!r}")
        return found

    def _select_by(self, how: str, what: Matcher) -> str:
        found = self._find_options(how, what)
        if not self.multiple:
            found = found[:1]

        for opt in found:
            if opt.disabled:
                raise ObjectDisabledError(f"option matching {what!r} by {how} on {self!r} is disabled")
            if not opt.selected:
                log.debug(f"selecting {opt!r}")
                opt.click()
        first = found[0]
        return "" if first.stale else first.text


def _normalize(value: Any) -> Any:
    if isinstance(value, bool):
        raise TypeError(f"expected str, number or pattern, got {value!r}:{type(value).__name__}")
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (str, re.Pattern)):
        return value
    raise TypeError(f"expected str, number or pattern, got {value!r}:{type(value).__name__}")
