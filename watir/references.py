# watir/references.py
from __future__ import annotations

import itertools
import threading
from typing import Any, Dict, Optional


class ReferenceTable:
    """
    Owns the live native element references of one browser.

    Handles keep an integer slot instead of the WebElement itself, so the
    browser can drop every reference at once (e.g. on close) and a handle
    being reset never leaves a dangling native object behind.
    """

    def __init__(self) -> None:
        self._slots: Dict[int, Any] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def store(self, native: Any) -> int:
        with self._lock:
            slot = next(self._counter)
            self._slots[slot] = native
            return slot

    def fetch(self, slot: Optional[int]) -> Optional[Any]:
        if slot is None:
            return None
        return self._slots.get(slot)

    def discard(self, slot: Optional[int]) -> None:
        if slot is None:
            return
        with self._lock:
            self._slots.pop(slot, None)

    def clear(self) -> None:
        with self._lock:
            self._slots.clear()

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, slot: object) -> bool:
        return slot in self._slots

    def __repr__(self) -> str:
        return f"<ReferenceTable live={len(self)}>"
