"""Load the ``scripts`` table of ``package.json`` into a sorted catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ManifestError

__all__ = [
    "LAST_RUN_LABEL",
    "MANIFEST_FILENAME",
    "PackageManifest",
    "ScriptEntry",
    "current_directory",
    "load_catalog",
    "merge_last_run",
]

MANIFEST_FILENAME = "package.json"
LAST_RUN_LABEL = "last run"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScriptEntry:
    name: str
    command: str
    description: str = ""


class PackageManifest(BaseModel):
    """The part of ``package.json`` this tool reads; other fields are ignored."""

    model_config = ConfigDict(extra="ignore", strict=True)

    scripts: dict[str, str]


def current_directory() -> Path:
    try:
        return Path.cwd()
    except OSError as exc:
        raise ManifestError(f"Error getting working directory path: {exc}") from exc


def load_catalog(cwd: Path) -> list[ScriptEntry]:
    """Return one entry per script in ``cwd/package.json``, sorted by name.

    Every failure is fatal: a missing or unreadable file, invalid JSON, or a
    ``scripts`` value that is not an object of strings.
    """
    path = cwd / MANIFEST_FILENAME
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Error reading {MANIFEST_FILENAME} file: {exc}") from exc

    try:
        manifest = PackageManifest.model_validate_json(text)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        detail = f"{location}: {error['msg']}" if location else error["msg"]
        raise ManifestError(f"Error parsing {MANIFEST_FILENAME} file: {detail}") from exc

    entries = [
        ScriptEntry(name=name, command=command)
        for name, command in manifest.scripts.items()
    ]
    entries.sort(key=lambda entry: entry.name)
    logger.debug("Loaded %d scripts from %s", len(entries), path)
    return entries


def merge_last_run(
    catalog: Sequence[ScriptEntry], last_run: str | None
) -> list[ScriptEntry]:
    """Prepend a ``last run`` copy of the entry named ``last_run``.

    The original entry keeps its sorted position. A name that is no longer
    in the catalog adds nothing.
    """
    entries = list(catalog)
    if not last_run:
        return entries

    match = next((entry for entry in entries if entry.name == last_run), None)
    if match is None:
        logger.debug("Cached script %r is no longer in the manifest", last_run)
        return entries

    return [replace(match, description=LAST_RUN_LABEL), *entries]
