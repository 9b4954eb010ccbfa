"""Logging setup backed by rich."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["setup_logging"]

# stdout belongs to the picker and to the script being run.
console = Console(stderr=True, highlight=False)


def setup_logging(level: str = "WARNING") -> None:
    """Route all log records through a single stderr ``RichHandler``.

    Unknown level names fall back to ``WARNING``.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(log_level)
    root_logger.addHandler(handler)

    # asyncio reports its selector choice at DEBUG.
    logging.getLogger("asyncio").setLevel(logging.WARNING)
