from __future__ import annotations
from pydantic import BaseModel, Field
from pathlib import Path
from typing import Optional
import os

class AppConfig(BaseModel):
    log_level: str = Field(default_factory=lambda: os.getenv('LAPWATCH_LOG_LEVEL', 'INFO').upper())
    events_root: Path = Field(default_factory=lambda: Path(os.getenv('LAPWATCH_EVENTS_ROOT', 'logs')))
    interval_ms: int = Field(default_factory=lambda: int(os.getenv('LAPWATCH_INTERVAL_MS', '100')), ge=0)

    def events_path(self, stopwatch_id: str) -> Path:
        return self.events_root / f"{stopwatch_id}.events.jsonl"

_config_singleton: Optional[AppConfig] = None

def get_config(force_refresh: bool = False) -> AppConfig:
    """Return a cached AppConfig, rebuilt from the environment on refresh."""
    global _config_singleton
    if force_refresh or _config_singleton is None:
        _config_singleton = AppConfig()
    return _config_singleton

SDK_CONFIG = get_config()
