# watir/elements/registry.py
from __future__ import annotations

"""Tag registry
---------------
Maps a tag name (and for <input>, the type attribute) to the handle class
used for it. The table is built once and cannot be changed afterwards.
"""

import functools
from types import MappingProxyType
from typing import Mapping, Optional, Type

from watir.elements.element import Element
from watir.elements.html_elements import (
    Anchor,
    Body,
    Div,
    Form,
    Heading,
    HTMLElement,
    Image,
    Label,
    List,
    ListItem,
    Paragraph,
    Span,
    Table,
    TableCell,
    TableRow,
    TextArea,
)
from watir.elements.iframe import Frame, IFrame
from watir.elements.input import Button, CheckBox, FileField, Input, Radio, TextField
from watir.elements.select import Option, Select


@functools.lru_cache(maxsize=1)
def build_registry() -> Mapping[str, Type[Element]]:
    table = {
        "a": Anchor,
        "body": Body,
        "button": Button,
        "div": Div,
        "form": Form,
        "frame": Frame,
        "iframe": IFrame,
        "img": Image,
        "input": Input,
        "label": Label,
        "li": ListItem,
        "ol": List,
        "ul": List,
        "option": Option,
        "p": Paragraph,
        "select": Select,
        "span": Span,
        "table": Table,
        "td": TableCell,
        "th": TableCell,
        "tr": TableRow,
        "textarea": TextArea,
    }
    table.update({f"h{n}": Heading for n in range(1, 7)})
    return MappingProxyType(table)


_INPUT_TYPES = MappingProxyType({
    "button": Button,
    "reset": Button,
    "submit": Button,
    "image": Button,
    "checkbox": CheckBox,
    "radio": Radio,
    "file": FileField,
    **{t: Input for t in TextField.PLAIN_INPUT_TYPES},
})


def resolve_element_class(tag_name: str, type_attribute: Optional[str] = None) -> Type[Element]:
    """Class for a tag; inputs resolve by type and anything unknown is an HTMLElement.

    Every type TextField's locator excludes resolves to some other class, so
    a TextField from a generic collection can always be located again.
    """
    tag = (tag_name or "").lower()
    if tag == "input":
        return _INPUT_TYPES.get((type_attribute or "").lower(), TextField)
    return build_registry().get(tag, HTMLElement)
