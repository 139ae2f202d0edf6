"""Event and snapshot models shared across the project."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from sdk.ids import new_ulid, now_utc_ms

EventKind = Literal["create", "start", "lap", "stop", "reset"]


class StopwatchSnapshot(BaseModel):
    """Point-in-time view of a stopwatch, taken under its lock."""

    stopwatch_id: str
    running: bool
    lap_times_ms: List[int] = Field(default_factory=list)
    elapsed_ms: int = 0


class StopwatchEvent(BaseModel):
    """One stopwatch operation as recorded by drivers such as the CLI."""

    id: str = Field(default_factory=new_ulid)
    ts_ms: int = Field(default_factory=now_utc_ms)
    kind: EventKind
    stopwatch_id: str
    lap_ms: Optional[int] = None
    lap_times_ms: List[int] = Field(default_factory=list)


def event_dump(event: BaseModel) -> Dict[str, Any]:
    """Return a plain ``dict`` of ``event`` suitable for JSON serialisation."""

    if hasattr(event, "model_dump"):
        return event.model_dump()  # type: ignore[return-value]
    return event.dict()  # type: ignore[return-value]


__all__ = ["EventKind", "StopwatchSnapshot", "StopwatchEvent", "event_dump"]
