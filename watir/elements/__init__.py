# watir/elements/__init__.py
"""
Elements package
----------------
Element handles, collections and the tag → class registry.
"""

from .element import Element, LocateState, MAX_STALE_RETRIES, attribute_property
from .html_elements import (
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
from .input import Button, CheckBox, FileField, Input, Radio, TextField
from .select import Option, Select
from .iframe import Frame, IFrame
from .collection import ElementCollection
from .registry import build_registry, resolve_element_class

__all__ = [
    "Element",
    "LocateState",
    "MAX_STALE_RETRIES",
    "attribute_property",
    "HTMLElement",
    "Anchor",
    "Body",
    "Div",
    "Form",
    "Heading",
    "Image",
    "Label",
    "List",
    "ListItem",
    "Paragraph",
    "Span",
    "Table",
    "TableCell",
    "TableRow",
    "TextArea",
    "Input",
    "Button",
    "CheckBox",
    "FileField",
    "Radio",
    "TextField",
    "Option",
    "Select",
    "Frame",
    "IFrame",
    "ElementCollection",
    "build_registry",
    "resolve_element_class",
]
