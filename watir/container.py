# watir/container.py
from __future__ import annotations

"""DSL accessors
----------------
Every scope that can hold elements (browser, element, frame) mixes in
`Container`, which turns `scope.div(id="x")` into a lazy `Div` handle and
`scope.divs(...)` into a lazy collection scoped under it.
"""

import importlib
from typing import Any, Dict, Optional, Tuple

# accessor name -> (class name, default selector, plural accessor name)
_ACCESSORS: Dict[str, Tuple[str, Dict[str, Any], Optional[str]]] = {
    "element": ("HTMLElement", {}, "elements"),
    "a": ("Anchor", {}, None),
    "link": ("Anchor", {}, "links"),
    "body": ("Body", {}, None),
    "button": ("Button", {}, "buttons"),
    "checkbox": ("CheckBox", {}, "checkboxes"),
    "div": ("Div", {}, "divs"),
    "file_field": ("FileField", {}, "file_fields"),
    "form": ("Form", {}, "forms"),
    "frame": ("Frame", {}, "frames"),
    "h1": ("Heading", {"tag_name": "h1"}, "h1s"),
    "h2": ("Heading", {"tag_name": "h2"}, "h2s"),
    "h3": ("Heading", {"tag_name": "h3"}, "h3s"),
    "h4": ("Heading", {"tag_name": "h4"}, "h4s"),
    "h5": ("Heading", {"tag_name": "h5"}, "h5s"),
    "h6": ("Heading", {"tag_name": "h6"}, "h6s"),
    "iframe": ("IFrame", {}, "iframes"),
    "image": ("Image", {}, "images"),
    "img": ("Image", {}, "imgs"),
    "input": ("Input", {}, "inputs"),
    "label": ("Label", {}, "labels"),
    "li": ("ListItem", {}, "lis"),
    "ol": ("List", {"tag_name": "ol"}, "ols"),
    "ul": ("List", {"tag_name": "ul"}, "uls"),
    "option": ("Option", {}, "options"),
    "p": ("Paragraph", {}, "ps"),
    "radio": ("Radio", {}, "radios"),
    "select": ("Select", {}, "selects"),
    "select_list": ("Select", {}, "select_lists"),
    "span": ("Span", {}, "spans"),
    "table": ("Table", {}, "tables"),
    "td": ("TableCell", {"tag_name": "td"}, "tds"),
    "th": ("TableCell", {"tag_name": "th"}, "ths"),
    "tr": ("TableRow", {}, "trs"),
    "text_field": ("TextField", {}, "text_fields"),
    "textarea": ("TextArea", {}, "textareas"),
}


def _element_class(name: str):
    return getattr(importlib.import_module("watir.elements"), name)


def accessor_names() -> Tuple[str, ...]:
    return tuple(sorted(_ACCESSORS))


def element_class_for(keyword: str):
    """(class, default selector) behind a singular accessor name such as "text_field"."""
    try:
        class_name, defaults, _ = _ACCESSORS[keyword]
    except KeyError:
        raise KeyError(f"unknown element type: {keyword}") from None
    return _element_class(class_name), dict(defaults)


def _singular(keyword: str, class_name: str, defaults: Dict[str, Any]):
    def accessor(self, **selector: Any):
        element = _element_class(class_name)(self, {**defaults, **selector})
        element.keyword = keyword
        return element

    accessor.__name__ = keyword
    accessor.__doc__ = f"Lazy `{class_name}` handle under this scope."
    return accessor


def _plural(keyword: str, class_name: str, defaults: Dict[str, Any]):
    def accessor(self, **selector: Any):
        from watir.elements.collection import ElementCollection

        return ElementCollection(self, {**defaults, **selector}, _element_class(class_name))

    accessor.__name__ = keyword
    accessor.__doc__ = f"Lazy collection of `{class_name}` under this scope."
    return accessor


class Container:
    """Mixin providing `element`/`elements` and the per-tag accessors."""

    # Implemented by each scope
    def ensure_child_context(self) -> None:
        raise NotImplementedError

    def search_context(self) -> Any:
        raise NotImplementedError

    def _wait_for_exists(self) -> None:
        raise NotImplementedError

    def _wait_for_present(self) -> None:
        raise NotImplementedError


for _keyword, (_class_name, _defaults, _plural_name) in _ACCESSORS.items():
    setattr(Container, _keyword, _singular(_keyword, _class_name, _defaults))
    if _plural_name:
        setattr(Container, _plural_name, _plural(_plural_name, _class_name, _defaults))

del _keyword, _class_name, _defaults, _plural_name
