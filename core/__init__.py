from .errors import IllegalStateError, InvalidArgumentError, StopwatchError
from .timing.stopwatch import Stopwatch

__all__ = ["Stopwatch", "StopwatchError", "InvalidArgumentError", "IllegalStateError"]
