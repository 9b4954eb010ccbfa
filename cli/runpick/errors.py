"""Errors that abort a ``runpick`` invocation."""

from __future__ import annotations

__all__ = ["CacheError", "ManifestError", "RunPickError", "SelectorError"]


class RunPickError(Exception):
    """Fatal error; the message is shown to the user as a single line."""


class ManifestError(RunPickError):
    pass


class CacheError(RunPickError):
    pass


class SelectorError(RunPickError):
    pass
