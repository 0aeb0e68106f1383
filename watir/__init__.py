# watir/__init__.py
"""
watir
-----
Element-centric browser automation on top of Selenium WebDriver: lazy,
self-relocating element handles addressed by selector mappings.
"""

from watir.browser import Browser, new_driver
from watir.elements import ElementCollection, resolve_element_class
from watir.exceptions import (
    InvalidSelectorError,
    NoMatchingWindowFoundError,
    NoValueFoundError,
    ObjectDisabledError,
    ObjectReadOnlyError,
    UnknownFrameError,
    UnknownObjectError,
    WaitTimeoutError,
    WatirError,
)
from watir.utils.config import configure, get_settings
from watir.wait import Wait
from watir.window import Window, WindowCollection

__version__ = "0.1.0"

__all__ = [
    "Browser",
    "new_driver",
    "ElementCollection",
    "resolve_element_class",
    "Window",
    "WindowCollection",
    "Wait",
    "configure",
    "get_settings",
    "WatirError",
    "UnknownObjectError",
    "UnknownFrameError",
    "ObjectDisabledError",
    "ObjectReadOnlyError",
    "NoValueFoundError",
    "InvalidSelectorError",
    "NoMatchingWindowFoundError",
    "WaitTimeoutError",
]
