# watir/locators/selector_builder.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from watir.exceptions import InvalidSelectorError
from watir.locators import xpath_support as xp
from watir.locators.locator import Filter, LocateStrategy
from watir.utils.logger import get_logger

log = get_logger(__name__)

Pattern = re.Pattern

WILDCARD_ATTRIBUTE = re.compile(r"^[a-z][a-z0-9_]*$")

_ALIASES = {"class_name": "class", "class_": "class"}

# key -> accepted value types
_VALID_TYPES: Dict[str, Tuple[type, ...]] = {
    "tag_name": (str, Pattern, list, tuple),
    "id": (str, Pattern),
    "class": (str, Pattern, list, tuple),
    "text": (str, Pattern),
    "visible_text": (str, Pattern),
    "visible": (bool,),
    "xpath": (str,),
    "css": (str,),
    "index": (int,),
}
_ATTRIBUTE_TYPES: Tuple[type, ...] = (str, Pattern, list, tuple, bool)
_CALLABLE_OK = {"id", "class", "text"}

_QUERY_COMPANIONS = {"index", "visible", "tag_name"}


def attribute_name(key: str) -> str:
    """Selector key to HTML attribute name: `data_foo` → `data-foo`, `for_` → `for`."""
    return key.rstrip("_").replace("_", "-")


def describe(value: Any) -> str:
    if isinstance(value, Pattern):
        return f"/{value.pattern}/"
    if callable(value) and not isinstance(value, type):
        return getattr(value, "__name__", "<callable>")
    return repr(value)


def matches(matcher: Any, value: Optional[str]) -> bool:
    """In-process comparison used by filters. A list matches when every entry does."""
    if value is None:
        return False
    if isinstance(matcher, Pattern):
        return matcher.search(value) is not None
    if isinstance(matcher, (list, tuple)):
        return all(matches(m, value) for m in matcher)
    if callable(matcher):
        return bool(matcher(value))
    return value == matcher


def _is_callable_matcher(value: Any) -> bool:
    return callable(value) and not isinstance(value, (str, Pattern, type))


class SelectorBuilder:
    """
    Turns a selector mapping into a LocateStrategy.

    Equality matchers compile to a single XPath query; regular expressions,
    callables, `visible` and `visible_text` become in-process filters run on
    the candidates of the unconstrained query.
    """

    # False when tag_predicate ignores the selector's tag_name
    honors_tag_name = True

    def __init__(self, selector: Mapping[str, Any], attributes: Sequence[str] = ()) -> None:
        self.selector = dict(selector)
        self.attributes = tuple(attributes)

    # ---------- Normalisation ----------

    def normalize(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key, value in self.selector.items():
            if not isinstance(key, str) or not WILDCARD_ATTRIBUTE.match(key):
                raise InvalidSelectorError(f"unable to locate element with selector key {key!r}")
            key = _ALIASES.get(key, key)
            if key == "element":
                raise InvalidSelectorError("'element' cannot be combined into a selector query")
            self._validate(key, value)
            out[key] = value
        return out

    def _validate(self, key: str, value: Any) -> None:
        if key == "index":
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidSelectorError(f"expected int for index, got {value!r}:{type(value).__name__}")
            return

        allowed = _VALID_TYPES.get(key, _ATTRIBUTE_TYPES)
        if key in _CALLABLE_OK or key not in _VALID_TYPES:
            if _is_callable_matcher(value):
                return
        if not isinstance(value, allowed):
            names = ", ".join(t.__name__ for t in allowed)
            raise InvalidSelectorError(f"expected one of [{names}] for {key}, got {value!r}:{type(value).__name__}")
        if isinstance(value, (list, tuple)):
            if key == "tag_name" and not all(isinstance(v, str) for v in value):
                raise InvalidSelectorError(f"tag_name list entries must be strings: {value!r}")
            if not all(isinstance(v, (str, Pattern)) for v in value):
                raise InvalidSelectorError(f"list entries for {key} must be strings or patterns: {value!r}")

    # ---------- Build ----------

    def build(self, multiple: bool = False) -> LocateStrategy:
        sel = self.normalize()
        if multiple and "index" in sel:
            raise InvalidSelectorError("index is not a valid selector for a collection")

        index = sel.pop("index", None)
        filters: List[Filter] = []

        visible = sel.pop("visible", None)
        if visible is not None:
            filters.append(Filter(f"visible={visible}", lambda el, v=visible: el.is_displayed() == v))

        if "xpath" in sel or "css" in sel:
            how, what = self._user_query(sel, filters)
        else:
            how, what = "xpath", self._build_xpath(sel, filters)

        if how == "xpath" and not filters and index is not None and index >= 0:
            what = f"({what})[{index + 1}]"
            index = None

        strategy = LocateStrategy(how=how, what=what, filters=tuple(filters), index=index)
        log.debug(f"built {strategy}")
        return strategy

    def _user_query(self, sel: Dict[str, Any], filters: List[Filter]) -> Tuple[str, str]:
        if "xpath" in sel and "css" in sel:
            raise InvalidSelectorError("xpath and css cannot be combined")
        extra = set(sel) - {"xpath", "css"} - _QUERY_COMPANIONS
        if extra:
            raise InvalidSelectorError(f"xpath/css cannot be combined with {sorted(extra)}")

        tag = sel.get("tag_name")
        if tag is not None:
            filters.append(Filter(f"tag_name={describe(tag)}", lambda el, t=tag: _tag_matches(t, el.tag_name)))
        if "xpath" in sel:
            return "xpath", sel["xpath"]
        return "css", sel["css"]

    def _build_xpath(self, sel: Dict[str, Any], filters: List[Filter]) -> str:
        predicates: List[str] = []

        tag = sel.pop("tag_name", None)
        tag_predicate = self.tag_predicate(tag, filters)
        if tag_predicate:
            predicates.append(tag_predicate)

        for key, value in sel.items():
            if key == "id":
                predicates.extend(self._attribute_predicates("id", value, filters))
            elif key == "class":
                predicates.extend(self._class_predicates(value, filters))
            elif key == "text":
                predicates.extend(self._text_predicates(value, filters))
            elif key == "visible_text":
                filters.append(Filter(f"visible_text={describe(value)}",
                                      lambda el, v=value: _visible_text_matches(v, el.text)))
            else:
                predicates.extend(self._attribute_predicates(attribute_name(key), value, filters))

        return ".//*" + "".join(f"[{p}]" for p in predicates)

    # ---------- Predicates (overridable) ----------

    def tag_predicate(self, tag: Any, filters: List[Filter]) -> Optional[str]:
        if tag is None:
            return None
        if isinstance(tag, Pattern):
            filters.append(Filter(f"tag_name={describe(tag)}", lambda el, t=tag: _tag_matches(t, el.tag_name)))
            return None
        if isinstance(tag, (list, tuple)):
            return "(" + " or ".join(_tag_equals(t) for t in tag) + ")"
        return _tag_equals(tag)

    def _text_predicates(self, value: Any, filters: List[Filter]) -> List[str]:
        if isinstance(value, str):
            return [f"normalize-space()={xp.escape(value)}"]
        filters.append(Filter(f"text={describe(value)}", lambda el, v=value: matches(v, el.text)))
        return []

    def _class_predicates(self, value: Any, filters: List[Filter]) -> List[str]:
        values = list(value) if isinstance(value, (list, tuple)) else [value]
        predicates = []
        for v in values:
            if isinstance(v, str):
                predicates.append(xp.class_predicate(v))
            else:
                filters.append(Filter(f"class={describe(v)}", lambda el, m=v: _class_matches(m, el.get_attribute("class"))))
        return predicates

    def _attribute_predicates(self, name: str, value: Any, filters: List[Filter]) -> List[str]:
        if value is True:
            return [f"@{name}"]
        if value is False:
            return [f"not(@{name})"]
        if isinstance(value, str):
            return [f"@{name}={xp.escape(value)}"]
        if isinstance(value, (list, tuple)):
            # every entry must match
            predicates = []
            for v in value:
                predicates.extend(self._attribute_predicates(name, v, filters))
            return predicates
        filters.append(Filter(f"{name}={describe(value)}", lambda el, n=name, v=value: matches(v, el.get_attribute(n))))
        return []


# ---------- Element specific builders ----------

class ButtonSelectorBuilder(SelectorBuilder):
    """Matches <button> and <input> whose type makes it a button; text also matches an input's value."""

    VALID_TYPES = ("button", "reset", "submit", "image")
    honors_tag_name = False

    def tag_predicate(self, tag: Any, filters: List[Filter]) -> Optional[str]:
        types = " or ".join(f"{xp.lower_ascii('@type')}={xp.escape(t)}" for t in self.VALID_TYPES)
        return f"({_tag_equals('button')} or ({_tag_equals('input')} and ({types})))"

    def _text_predicates(self, value: Any, filters: List[Filter]) -> List[str]:
        if isinstance(value, str):
            lit = xp.escape(value)
            return [f"(normalize-space()={lit} or @value={lit})"]
        filters.append(Filter(
            f"text={describe(value)}",
            lambda el, v=value: matches(v, el.text) or matches(v, el.get_attribute("value")),
        ))
        return []


class TextFieldSelectorBuilder(SelectorBuilder):
    """Matches <input> elements that accept typed text."""

    NON_TEXT_TYPES = ("file", "radio", "checkbox", "submit", "reset", "image", "button", "hidden", "range", "color")
    # input types with no dedicated handle class
    PLAIN_INPUT_TYPES = ("hidden", "range", "color")
    honors_tag_name = False

    def tag_predicate(self, tag: Any, filters: List[Filter]) -> Optional[str]:
        types = " or ".join(f"{xp.lower_ascii('@type')}={xp.escape(t)}" for t in self.NON_TEXT_TYPES)
        return f"({_tag_equals('input')} and not({types}))"

    def _text_predicates(self, value: Any, filters: List[Filter]) -> List[str]:
        # input text lives in the value property, never in child nodes
        filters.append(Filter(f"text={describe(value)}", lambda el, v=value: matches(v, el.get_attribute("value"))))
        return []


# ---------- Matching helpers ----------

def _tag_equals(tag: str) -> str:
    return f"{xp.lower('local-name()')}={xp.escape(tag.lower())}"


def _tag_matches(matcher: Any, tag_name: Optional[str]) -> bool:
    if tag_name is None:
        return False
    tag_name = tag_name.lower()
    if isinstance(matcher, str):
        return tag_name == matcher.lower()
    if isinstance(matcher, (list, tuple)):
        return tag_name in {t.lower() for t in matcher}
    return matches(matcher, tag_name)


def _class_matches(matcher: Any, class_attr: Optional[str]) -> bool:
    return any(matches(matcher, token) for token in (class_attr or "").split())


def _visible_text_matches(matcher: Any, text: Optional[str]) -> bool:
    if isinstance(matcher, str):
        return (text or "").strip() == matcher
    return matches(matcher, text or "")


