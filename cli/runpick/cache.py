"""Per-user memory of the last script run in each directory."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from tempfile import NamedTemporaryFile

from pydantic import TypeAdapter, ValidationError

from .errors import CacheError

__all__ = [
    "CACHE_FILENAME",
    "RunCache",
    "default_cache_dir",
    "load_cache",
    "save_cache",
    "user_cache_root",
]

CACHE_VENDOR = "runpick"
CACHE_APP = "scripts"
CACHE_FILENAME = "last_run.json"

logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(dict[str, str])


@dataclass
class RunCache:
    """Absolute directory path -> name of the script last run there."""

    entries: dict[str, str] = field(default_factory=dict)

    def last_run(self, cwd: Path) -> str | None:
        return self.entries.get(str(cwd))

    def remember(self, cwd: Path, name: str) -> None:
        self.entries[str(cwd)] = name


def user_cache_root() -> Path:
    """Return the platform's per-user cache directory."""
    if sys.platform == "win32":
        local = os.getenv("LOCALAPPDATA")
        if local:
            return Path(local)
        return Path.home() / "AppData" / "Local"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches"
    xdg = os.getenv("XDG_CACHE_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return Path.home() / ".cache"


def default_cache_dir(override: Path | None = None) -> Path:
    if override is not None:
        return override
    return user_cache_root() / CACHE_VENDOR / CACHE_APP


def load_cache(path: Path) -> tuple[RunCache, bool]:
    """Read the cache at ``path``.

    Returns an empty cache and ``False`` when the file is missing, unreadable
    or malformed; history is optional, so none of these are errors.
    """
    try:
        raw = path.read_bytes()
        entries = _ENTRIES.validate_json(raw)
    except (OSError, ValidationError) as exc:
        logger.debug("No usable run cache at %s: %s", path, exc)
        return RunCache(), False
    return RunCache(entries=entries), True


def save_cache(cache: RunCache, path: Path) -> None:
    """Rewrite the whole cache file, replacing it in one step."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CacheError(f"Error creating cache directory: {exc}") from exc

    payload = json.dumps(cache.entries, indent=2, sort_keys=True)
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise CacheError(f"Error writing cache file: {exc}") from exc
    logger.debug("Saved %d run cache entries to %s", len(cache.entries), path)
