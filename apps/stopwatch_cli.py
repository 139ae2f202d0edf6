from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import List, Optional

import typer

from core.errors import InvalidArgumentError
from core.events import StopwatchEvent
from core.timing.stopwatch import Stopwatch
from sdk.config import get_config
from sdk.ids import new_ulid
from sdk.logging import JsonlWriter, setup_logging
from sdk.registry import StopwatchRegistry

logger = logging.getLogger("lapwatch.cli")

app = typer.Typer(add_completion=False, no_args_is_help=True)

# Operation sequence replayed by ``demo``; each step is preceded by one interval.
DEMO_SCRIPT = (
    "start", "stop",
    "start", "stop",
    "start", "lap", "lap", "lap", "lap", "stop",
    "start", "stop",
    "reset", "start", "stop",
)


def _record(writer: Optional[JsonlWriter], sw: Stopwatch, kind: str, lap_ms: Optional[int] = None) -> None:
    laps = sw.get_lap_times()
    logger.info("%s %s -> %s", sw.id, kind, laps)
    if writer is not None:
        writer.write(StopwatchEvent(kind=kind, stopwatch_id=sw.id, lap_ms=lap_ms, lap_times_ms=laps))


def run_script(sw: Stopwatch, interval_s: float, writer: Optional[JsonlWriter] = None) -> None:
    """Replay ``DEMO_SCRIPT`` against ``sw``, sleeping ``interval_s`` before each step."""
    for step in DEMO_SCRIPT:
        time.sleep(interval_s)
        result = getattr(sw, step)()
        _record(writer, sw, step, result)


@app.command()
def demo(
    stopwatch_id: Optional[str] = typer.Option(None, "--id", help="Stopwatch id (defaults to a fresh ULID)"),
    interval_ms: Optional[int] = typer.Option(None, "--interval-ms", min=0, help="Pause between operations"),
    events: Optional[Path] = typer.Option(
        None, "--events", help="Event file (defaults to LAPWATCH_EVENTS_ROOT/<id>.events.jsonl)"
    ),
    no_events: bool = typer.Option(False, "--no-events", help="Do not write an event file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Overrides LAPWATCH_LOG_LEVEL"),
) -> None:
    """Drive one stopwatch through a scripted start/lap/stop/reset sequence on a worker thread."""

    cfg = get_config()
    setup_logging(log_level or cfg.log_level)
    interval = cfg.interval_ms if interval_ms is None else interval_ms

    registry = StopwatchRegistry()
    try:
        sw = registry.create(new_ulid() if stopwatch_id is None else stopwatch_id)
    except InvalidArgumentError as exc:
        typer.echo(f"[lapwatch] {exc}", err=True)
        raise typer.Exit(code=1)

    writer: Optional[JsonlWriter] = None
    if not no_events:
        writer = JsonlWriter(events if events is not None else cfg.events_path(sw.id), flush_every=10)

    failures: List[BaseException] = []

    def _worker() -> None:
        try:
            run_script(sw, interval / 1000.0, writer)
        except Exception as exc:
            logger.exception("demo worker for %s failed", sw.id)
            failures.append(exc)

    try:
        if writer is not None:
            _record(writer, sw, "create")
        t = threading.Thread(target=_worker, name=f"stopwatch-{sw.id}", daemon=True)
        t.start()
        t.join()
    finally:
        if writer is not None:
            writer.close()

    if failures:
        typer.echo(f"[lapwatch] demo failed: {failures[0]}", err=True)
        raise typer.Exit(code=1)

    laps = sw.get_lap_times()
    typer.echo(f"[lapwatch] {sw.id}: laps={laps} total={sum(laps)}ms")


@app.command()
def race(
    stopwatch_id: str = typer.Option("dup", "--id", help="Id every thread tries to create"),
    threads: int = typer.Option(10, "--threads", min=1, help="Number of competing threads"),
) -> None:
    """Have THREADS threads create the same stopwatch id at once; exactly one wins."""

    setup_logging(get_config().log_level)
    registry = StopwatchRegistry()
    barrier = threading.Barrier(threads)
    lock = threading.Lock()
    winners: List[str] = []
    losers: List[str] = []

    def _contend() -> None:
        name = threading.current_thread().name
        barrier.wait()
        try:
            registry.create(stopwatch_id)
        except InvalidArgumentError:
            with lock:
                losers.append(name)
            return
        with lock:
            winners.append(name)

    pool = [threading.Thread(target=_contend, name=f"racer-{i}") for i in range(threads)]
    for t in pool:
        t.start()
    for t in pool:
        t.join()

    typer.echo(f"[lapwatch] winners={len(winners)} losers={len(losers)}")
    typer.echo(f"[lapwatch] registry: {[sw.id for sw in registry.list_all()]}")


if __name__ == "__main__":
    app()
