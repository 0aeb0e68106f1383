# watir/exceptions.py
"""Exception hierarchy raised by the element core."""


class WatirError(Exception):
    """Base exception for all watir errors."""


class UnknownObjectError(WatirError):
    """Raised when a selector matches nothing, or the element is gone for good."""


class UnknownFrameError(UnknownObjectError):
    """Raised when the frame an element lives in can no longer be resolved."""


class ObjectDisabledError(WatirError):
    """Raised when interacting with an element that is disabled."""


class ObjectReadOnlyError(WatirError):
    """Raised when typing into an element that is read only."""


class NoValueFoundError(WatirError):
    """Raised when a select list has no option matching the requested value."""


class InvalidSelectorError(WatirError, ValueError):
    """Raised when a selector has an unrecognised key or value type."""


class NoMatchingWindowFoundError(WatirError):
    """Raised when no browser window matches the window selector."""


class WaitTimeoutError(WatirError, TimeoutError):
    """Raised when a waited-on condition does not flip before the deadline."""
