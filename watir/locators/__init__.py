# watir/locators/__init__.py
"""
Locators package
----------------
Turns selector mappings into XPath/CSS queries plus in-process filters and
runs them against a Selenium search context.
"""

from .locator import Filter, LocateStrategy
from .selector_builder import ButtonSelectorBuilder, SelectorBuilder, TextFieldSelectorBuilder
from . import xpath_support

__all__ = [
    "Filter",
    "LocateStrategy",
    "SelectorBuilder",
    "ButtonSelectorBuilder",
    "TextFieldSelectorBuilder",
    "xpath_support",
]
