from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from threading import Lock
from typing import IO, Any, Dict, Union

from pydantic import BaseModel

from core.events import event_dump

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach a single stdout handler to the root logger and set ``level``."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {level!r}")
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    root.addHandler(handler)
    return root


class JsonlWriter:
    """Append stopwatch events to a JSON-lines file, one object per line.

    ``write`` accepts pydantic models (dumped through ``event_dump``) or plain
    dicts.  Lines from concurrent threads never interleave; the file is
    flushed every ``flush_every`` records and on ``close``.
    """

    def __init__(self, out_path: Path, flush_every: int = 50) -> None:
        ensure_dir(out_path.parent)
        self.path = out_path
        self._fh: IO[str] = out_path.open("a", encoding="utf-8")
        self._pending = 0
        self._flush_every = max(1, flush_every)
        self._lock = Lock()

    def write(self, event: Union[BaseModel, Dict[str, Any]]) -> None:
        payload = event_dump(event) if isinstance(event, BaseModel) else event
        line = json.dumps(payload, ensure_ascii=False)
        with self._lock:
            if self._fh.closed:
                raise ValueError(f"event file {self.path} is closed")
            self._fh.write(line + "\n")
            self._pending += 1
            if self._pending >= self._flush_every:
                self._fh.flush()
                self._pending = 0

    def close(self) -> None:
        with self._lock:
            if self._fh.closed:
                return
            try:
                self._fh.flush()
            finally:
                self._fh.close()



def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)
