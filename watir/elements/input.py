# watir/elements/input.py
from __future__ import annotations

from pathlib import Path
from typing import Union

from watir.elements.element import attribute_property
from watir.elements.html_elements import HTMLElement
from watir.elements.user_editable import UserEditable
from watir.locators.selector_builder import ButtonSelectorBuilder, TextFieldSelectorBuilder
from watir.utils.logger import get_logger

log = get_logger(__name__)


class Input(HTMLElement):
    DEFAULT_SELECTOR = {"tag_name": "input"}

    name = attribute_property("name")
    type = attribute_property("type")
    disabled = attribute_property("disabled", bool)
    required = attribute_property("required", bool)
    autofocus = attribute_property("autofocus", bool)


class Button(Input):
    """<button>, or an <input> of type button, reset, submit or image."""

    DEFAULT_SELECTOR = {}
    builder_class = ButtonSelectorBuilder
    VALID_TYPES = ButtonSelectorBuilder.VALID_TYPES

    @property
    def text(self) -> str:
        """Button text, or the value of an <input> button."""
        def _text(native) -> str:
            if native.tag_name.lower() == "input":
                return native.get_attribute("value") or ""
            return native.text

        return self._element_call(_text)


class TextField(UserEditable, Input):
    """An <input> that accepts typed text."""

    DEFAULT_SELECTOR = {}
    builder_class = TextFieldSelectorBuilder
    NON_TEXT_TYPES = TextFieldSelectorBuilder.NON_TEXT_TYPES
    PLAIN_INPUT_TYPES = TextFieldSelectorBuilder.PLAIN_INPUT_TYPES

    placeholder = attribute_property("placeholder")
    readonly = attribute_property("readonly", bool)
    maxlength = attribute_property("maxlength", int)


class CheckBox(Input):
    DEFAULT_SELECTOR = {"tag_name": "input", "type": "checkbox"}

    def set(self, value: bool = True) -> "CheckBox":
        """Check (or with value=False, uncheck) the box; clicks only when the state differs."""
        if self.is_set != bool(value):
            self.click()
        return self

    def clear(self) -> "CheckBox":
        return self.set(False)

    @property
    def is_set(self) -> bool:
        return self._element_call(lambda n: n.is_selected())

    checked = is_set


class Radio(Input):
    DEFAULT_SELECTOR = {"tag_name": "input", "type": "radio"}

    def set(self, value: bool = True) -> "Radio":
        if value and not self.is_set:
            self.click()
        return self

    def clear(self) -> "Radio":
        # a radio can only be cleared by choosing another one in its group
        return self

    @property
    def is_set(self) -> bool:
        return self._element_call(lambda n: n.is_selected())

    @property
    def text(self) -> str:
        """Text of the <label> pointing at this radio, when there is one."""
        radio_id = self.id
        if not radio_id:
            return ""
        label = self.browser.label(for_=radio_id)
        return label.text if label.exists else ""


class FileField(Input):
    DEFAULT_SELECTOR = {"tag_name": "input", "type": "file"}

    def set(self, path: Union[str, Path]) -> "FileField":
        """Attach a local file; the path must exist."""
        path = Path(path).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(f"{path} does not exist")
        log.debug(f"attaching {path} to {self!r}")
        self.value = str(path)
        return self

    @property
    def value(self) -> str:
        return self.attribute_value("value") or ""

    @value.setter
    def value(self, path: str) -> None:
        self._element_call(lambda n: n.send_keys(path), self._wait_for_exists)
