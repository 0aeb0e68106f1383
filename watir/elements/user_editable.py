# watir/elements/user_editable.py
from __future__ import annotations

from typing import Any


class UserEditable:
    """Typing helpers shared by text fields and text areas."""

    def set(self, *keys: Any):
        """Clear the field, then type `keys`."""
        def _set(native) -> None:
            native.clear()
            native.send_keys(*[str(k) for k in keys])

        self._element_call(_set, self._present_and_writable)
        return self

    def append(self, *keys: Any):
        return self.send_keys(*[str(k) for k in keys])

    def clear(self):
        self._element_call(lambda n: n.clear(), self._present_and_writable)
        return self

    @property
    def value(self) -> str:
        return self.attribute_value("value") or ""

    @value.setter
    def value(self, text: Any) -> None:
        self.set(text)
