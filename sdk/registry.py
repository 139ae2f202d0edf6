"""Process-wide registry of named stopwatches."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, List, Optional

from core.errors import InvalidArgumentError
from core.timing.stopwatch import Clock, Stopwatch

logger = logging.getLogger(__name__)


class StopwatchRegistry:
    """Creates stopwatches with unique ids and keeps a reference to each."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock
        self._map: Dict[str, Stopwatch] = {}
        self._lock = Lock()

    def create(self, stopwatch_id: str) -> Stopwatch:
        if not isinstance(stopwatch_id, str) or not stopwatch_id:
            raise InvalidArgumentError(f"stopwatch id must be a non-empty string, got {stopwatch_id!r}")
        with self._lock:
            if stopwatch_id in self._map:
                logger.debug("duplicate stopwatch id %r", stopwatch_id)
                raise InvalidArgumentError(f"stopwatch id {stopwatch_id!r} is already taken")
            sw = Stopwatch(stopwatch_id, clock=self._clock)
            self._map[stopwatch_id] = sw
        logger.debug("created stopwatch %r", stopwatch_id)
        return sw

    def get(self, stopwatch_id: str) -> Optional[Stopwatch]:
        with self._lock:
            return self._map.get(stopwatch_id)

    def list_all(self) -> List[Stopwatch]:
        with self._lock:
            return list(self._map.values())

    def __contains__(self, stopwatch_id: object) -> bool:
        with self._lock:
            return stopwatch_id in self._map

    def __len__(self) -> int:
        with self._lock:
            return len(self._map)


REGISTRY = StopwatchRegistry()


def get_stopwatch(stopwatch_id: str) -> Stopwatch:
    """Create a stopwatch in the process-wide registry."""
    return REGISTRY.create(stopwatch_id)


def get_stopwatches() -> List[Stopwatch]:
    return REGISTRY.list_all()


__all__ = ["StopwatchRegistry", "REGISTRY", "get_stopwatch", "get_stopwatches"]
