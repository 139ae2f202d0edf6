"""Error kinds raised by stopwatches and the stopwatch registry."""

from __future__ import annotations


class StopwatchError(Exception):
    """Base class for every error raised by this project."""


class InvalidArgumentError(StopwatchError, ValueError):
    """Raised when a stopwatch id is missing, empty or already registered."""


class IllegalStateError(StopwatchError, RuntimeError):
    """Raised when an operation is not allowed in the current timer state."""


__all__ = ["StopwatchError", "InvalidArgumentError", "IllegalStateError"]
