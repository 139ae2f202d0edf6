# tests/unit/conftest.py
import pytest

from sdk.registry import StopwatchRegistry


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: int = 1_000):
        self.now_ms = start_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms

    def __call__(self) -> int:
        return self.now_ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    """Isolated registry whose stopwatches read the fake clock."""
    return StopwatchRegistry(clock=clock)
