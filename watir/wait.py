# watir/wait.py
from __future__ import annotations

"""Wait engine
--------------
Polls a predicate until it flips or the deadline passes. Every call owns its
own deadline so a predicate may itself wait without interfering.
"""

from typing import Any, Callable, Optional, TypeVar

from watir.exceptions import WaitTimeoutError
from watir.utils.config import default_timeout, get_settings
from watir.utils.logger import get_logger
from watir.utils.timing import Deadline, sleep

T = TypeVar("T")

log = get_logger(__name__)


def _interval(interval: Optional[float]) -> float:
    return get_settings().POLL_INTERVAL if interval is None else max(0.0, float(interval))


def _timeout_message(timeout: float, message: Optional[str]) -> str:
    msg = f"timed out after {timeout:g} seconds"
    return f"{msg}, {message}" if message else msg


class Wait:
    """Namespace for the blocking poll loops."""

    @staticmethod
    def until(
        predicate: Callable[[], T],
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        message: Optional[str] = None,
    ) -> T:
        """
        Evaluate `predicate` until it returns a truthy value and return that value.

        With a timeout of 0 the predicate runs once and no sleep happens.

        Raises:
            WaitTimeoutError when the deadline elapses first.
        """
        deadline = Deadline.after(default_timeout(timeout))
        pause = _interval(interval)

        while True:
            result = predicate()
            if result:
                return result
            if deadline.expired():
                raise WaitTimeoutError(_timeout_message(deadline.timeout, message))
            sleep(min(pause, deadline.remaining()))

    @staticmethod
    def while_(
        predicate: Callable[[], Any],
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        message: Optional[str] = None,
    ) -> None:
        """Evaluate `predicate` until it returns a falsy value."""
        deadline = Deadline.after(default_timeout(timeout))
        pause = _interval(interval)

        while True:
            if not predicate():
                return
            if deadline.expired():
                raise WaitTimeoutError(_timeout_message(deadline.timeout, message))
            sleep(min(pause, deadline.remaining()))


class Waitable:
    """Mixin giving an object `wait_until`/`wait_while` helpers that pass itself to the predicate."""

    def wait_until(
        self,
        predicate: Optional[Callable[[Any], Any]] = None,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        message: Optional[str] = None,
    ):
        if predicate is None:
            predicate = lambda obj: obj.present  # noqa: E731
        Wait.until(lambda: predicate(self), timeout=timeout, interval=interval,
                   message=message or f"waiting for true condition on {self!r}")
        return self

    def wait_while(
        self,
        predicate: Optional[Callable[[Any], Any]] = None,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        message: Optional[str] = None,
    ):
        if predicate is None:
            predicate = lambda obj: obj.present  # noqa: E731
        Wait.while_(lambda: predicate(self), timeout=timeout, interval=interval,
                    message=message or f"waiting for false condition on {self!r}")
        return self

    def wait_until_present(self, timeout: Optional[float] = None, interval: Optional[float] = None):
        log.debug(f"waiting for {self!r} to become present")
        return self.wait_until(lambda obj: obj.present, timeout=timeout, interval=interval,
                               message=f"waiting for {self!r} to become present")

    def wait_while_present(self, timeout: Optional[float] = None, interval: Optional[float] = None):
        log.debug(f"waiting for {self!r} to disappear")
        return self.wait_while(lambda obj: obj.present, timeout=timeout, interval=interval,
                               message=f"waiting for {self!r} not to be present")
