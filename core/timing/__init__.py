from .stopwatch import Clock, Stopwatch

__all__ = ["Clock", "Stopwatch"]
