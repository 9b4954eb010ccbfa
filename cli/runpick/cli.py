"""Pick a ``package.json`` script interactively and run it with npm."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

import typer

from .cache import CACHE_FILENAME, default_cache_dir, load_cache, save_cache
from .errors import RunPickError
from .log import setup_logging
from .manifest import ScriptEntry, current_directory, load_catalog, merge_last_run
from .runner import run_script
from .selector import select_script
from .settings import Settings, load_settings

__all__ = ["app", "entrypoint", "main", "pick"]

Selector = Callable[[Sequence[ScriptEntry]], tuple[ScriptEntry | None, bool]]
Runner = Callable[[str], object]

logger = logging.getLogger(__name__)
app = typer.Typer(
    help="Pick a script from package.json and run it with npm.",
    add_completion=False,
)


def main(
    settings: Settings,
    *,
    cwd: Path | None = None,
    selector: Selector = select_script,
    runner: Runner = run_script,
) -> int:
    """Load, pick, remember, run. Raises ``RunPickError`` on fatal errors."""
    cwd = cwd if cwd is not None else current_directory()
    catalog = load_catalog(cwd)

    cache_path = default_cache_dir(settings.cache_dir) / CACHE_FILENAME
    cache, found = load_cache(cache_path)
    if not found:
        logger.debug("Starting without run history")

    entries = merge_last_run(catalog, cache.last_run(cwd))
    chosen, should_run = selector(entries)
    if not should_run or chosen is None:
        logger.debug("Selection cancelled")
        return 0

    cache.remember(cwd, chosen.name)
    save_cache(cache, cache_path)
    runner(chosen.name)
    return 0


@app.command()
def pick() -> None:
    settings = load_settings()
    setup_logging(settings.effective_log_level)
    try:
        main(settings, selector=select_script, runner=run_script)
    except RunPickError as exc:
        raise SystemExit(str(exc)) from exc


def entrypoint() -> None:
    app()
