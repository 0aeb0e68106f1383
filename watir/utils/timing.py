# watir/utils/timing.py
from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, ParamSpec

from watir.utils.logger import get_logger

P = ParamSpec("P")
T = TypeVar("T")


# ---------------- Monotonic time helpers ----------------

def now() -> float:
    """Monotonic time in seconds."""
    return time.monotonic()


def sleep(seconds: float) -> None:
    """Sleep for `seconds` (blocking). Non-positive values return immediately."""
    if seconds <= 0:
        return
    time.sleep(seconds)


# ---------------- Deadline ----------------

@dataclass
class Deadline:
    """A point in monotonic time owned by a single wait."""
    timeout: float
    expires_at: float

    @classmethod
    def after(cls, timeout: float) -> "Deadline":
        timeout = max(0.0, timeout)
        return cls(timeout=timeout, expires_at=now() + timeout)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - now())

    def expired(self) -> bool:
        return now() >= self.expires_at


# ---------------- Stopwatch ----------------

@dataclass
class Stopwatch:
    """Simple stopwatch usable as a context manager."""
    started_at: Optional[float] = None

    def start(self) -> "Stopwatch":
        self.started_at = now()
        return self

    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        return max(0.0, now() - self.started_at)

    def __enter__(self) -> "Stopwatch":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


# ---------------- measure decorator ----------------

def measure(label: str = "", level: str = "DEBUG") -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator to log the execution time of a function.
    Example:
        @measure("goto")
        def goto(self, url): ...
    """
    log = get_logger(__name__)
    log_fn = getattr(log, level.lower(), log.debug)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with Stopwatch() as sw:
                try:
                    return func(*args, **kwargs)
                finally:
                    secs = sw.elapsed()
                    human = f"{secs * 1000:.0f} ms" if secs < 1 else f"{secs:.3f} s"
                    log_fn(f"{label or func.__name__} took {human}")
        return wrapper
    return decorator
