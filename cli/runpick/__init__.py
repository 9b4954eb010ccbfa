"""Interactive picker for the ``scripts`` table of ``package.json``.

Remembers the last script run in each directory and offers it first.
"""

from __future__ import annotations

__all__ = ["app", "entrypoint", "main"]

from .cli import app, entrypoint, main  # noqa: E402 (re-export for package API)
