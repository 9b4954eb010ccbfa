"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

__all__ = ["Settings", "load_settings"]


def _truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    """Environment-aware flags for a single invocation."""

    cache_dir: Path | None = None
    log_level: str = "WARNING"
    debug: bool = False

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


def load_settings() -> Settings:
    cache_dir = os.getenv("RUNPICK_CACHE_DIR")
    return Settings(
        cache_dir=Path(cache_dir).expanduser() if cache_dir else None,
        log_level=os.getenv("RUNPICK_LOG_LEVEL", "WARNING"),
        debug=_truthy(os.getenv("RUNPICK_DEBUG")),
    )
