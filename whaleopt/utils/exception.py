"""Custom exceptions for the Whaleopt package."""

from whaleopt.utils import logging

logger = logging.get_logger(__name__)


class Error(Exception):
    """A generic Error class derived from Exception.

    Logs the error class and message to the logger.
    """

    def __init__(self, cls: str, msg: str) -> None:
        super().__init__(f"{cls}: {msg}")
        logger.error("%s: %s.", cls, msg)


class ArgumentError(Error):
    """Error for wrong number of provided arguments."""

    def __init__(self, error: str) -> None:
        super().__init__("ArgumentError", error)


class BuildError(Error):
    """Error for classes not being built before use."""

    def __init__(self, error: str) -> None:
        super().__init__("BuildError", error)


class SizeError(Error):
    """Error for mismatched tensor or sequence sizes."""

    def __init__(self, error: str) -> None:
        super().__init__("SizeError", error)


class TypeError(Error):
    """Error for wrong variable types."""

    def __init__(self, error: str) -> None:
        super().__init__("TypeError", error)


class ValueError(Error):
    """Error for out-of-range values."""

    def __init__(self, error: str) -> None:
        super().__init__("ValueError", error)


class InvalidConfigurationError(Error):
    """Error for an optimization task that cannot be set up.

    Raised for non-positive sizes or iteration budgets and for
    inverted or non-finite search bounds.
    """

    def __init__(self, error: str) -> None:
        super().__init__("InvalidConfigurationError", error)


class InvalidBoundsError(Error):
    """Error for a lower bound greater than its upper bound."""

    def __init__(self, error: str) -> None:
        super().__init__("InvalidBoundsError", error)


class NotSortedError(Error):
    """Error for reading a population rank before it has been sorted.

    Signals a programming error in the caller, not a recoverable condition.
    """

    def __init__(self, error: str) -> None:
        super().__init__("NotSortedError", error)
