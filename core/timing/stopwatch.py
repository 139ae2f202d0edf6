"""Thread-safe lap stopwatch.

A :class:`Stopwatch` is a two-state machine (stopped / running) that records
lap durations in integer milliseconds.  Every transition and every read of the
mutable timing state happens under a single per-instance lock, so one
stopwatch can be shared freely between threads.

Lap accounting across a stop/restart cycle works like this: ``stop()`` closes
the open lap and appends it, remembering its duration as the *stop split*.
When the watch is started again that trailing entry is taken back out and the
open lap boundary is moved ``split`` milliseconds into the past, so the next
``lap()`` or ``stop()`` records the whole interval exactly once.  After any
``stop()`` the recorded laps therefore add up to the total running time.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List, Optional

from core.errors import IllegalStateError, InvalidArgumentError
from core.events import StopwatchSnapshot
from sdk.ids import now_monotonic_ms

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


class Stopwatch:
    """Named lap timer; obtain instances through ``StopwatchRegistry.create``."""

    def __init__(self, stopwatch_id: str, clock: Optional[Clock] = None) -> None:
        if not isinstance(stopwatch_id, str) or not stopwatch_id:
            raise InvalidArgumentError(f"stopwatch id must be a non-empty string, got {stopwatch_id!r}")
        self._id = stopwatch_id
        self._clock: Clock = clock or now_monotonic_ms
        self._lock = Lock()

        self._running = False
        self._start_ms = 0
        self._lap_ms = 0
        self._stop_ms: Optional[int] = None
        self._last_stop_split = 0
        self._laps: List[int] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def id(self) -> str:
        return self._id

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def elapsed_ms(self) -> int:
        """Recorded laps plus the open interval when running."""
        with self._lock:
            return self._elapsed_locked()

    def get_lap_times(self) -> List[int]:
        """Return a copy of the recorded lap durations in milliseconds."""
        with self._lock:
            return list(self._laps)

    def snapshot(self) -> StopwatchSnapshot:
        with self._lock:
            return StopwatchSnapshot(
                stopwatch_id=self._id,
                running=self._running,
                lap_times_ms=list(self._laps),
                elapsed_ms=self._elapsed_locked(),
            )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def start(self) -> None:
        with self._lock:
            if self._running:
                logger.debug("start rejected for %s: already running", self._id)
                raise IllegalStateError(f"stopwatch {self._id!r} is already running")
            now = self._clock()
            self._running = True
            self._start_ms = now
            if self._stop_ms is None:
                self._lap_ms = now
            else:
                self._resume_open_lap(now)
        logger.debug("stopwatch %s started", self._id)

    def lap(self) -> int:
        """Close the open lap, record it and return its duration."""
        with self._lock:
            if not self._running:
                logger.debug("lap rejected for %s: not running", self._id)
                raise IllegalStateError(f"stopwatch {self._id!r} is not running")
            now = self._clock()
            d = self._close_lap(now)
        logger.debug("stopwatch %s lap %d ms", self._id, d)
        return d

    def stop(self) -> int:
        """Stop the watch, record the final lap and return its duration."""
        with self._lock:
            if not self._running:
                logger.debug("stop rejected for %s: not running", self._id)
                raise IllegalStateError(f"stopwatch {self._id!r} is not running")
            now = self._clock()
            self._running = False
            d = self._close_lap(now)
            self._stop_ms = now
            self._last_stop_split = d
        logger.debug("stopwatch %s stopped, final lap %d ms", self._id, d)
        return d

    def reset(self) -> None:
        with self._lock:
            self._running = False
            self._start_ms = 0
            self._lap_ms = 0
            self._stop_ms = None
            self._last_stop_split = 0
            self._laps.clear()
        logger.debug("stopwatch %s reset", self._id)

    # ------------------------------------------------------------------
    # Internals (lock must be held)
    # ------------------------------------------------------------------
    def _close_lap(self, now: int) -> int:
        d = max(0, now - self._lap_ms)
        self._laps.append(d)
        self._lap_ms = now
        return d

    def _resume_open_lap(self, now: int) -> None:
        # The last entry is the lap closed by stop(); reopen it.
        if self._laps:
            self._laps.pop()
        self._lap_ms = now - self._last_stop_split

    def _elapsed_locked(self) -> int:
        total = sum(self._laps)
        if self._running:
            total += max(0, self._clock() - self._lap_ms)
        return total

    def __repr__(self) -> str:
        with self._lock:
            return f"Stopwatch(id={self._id!r}, running={self._running}, lap_times={self._laps!r})"


__all__ = ["Clock", "Stopwatch"]
