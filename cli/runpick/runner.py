"""Run a manifest script through npm with the terminal passed straight through."""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass, field
from typing import IO, Any

__all__ = ["PACKAGE_MANAGER", "StdStreams", "build_command", "run_script"]

PACKAGE_MANAGER = "npm"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StdStreams:
    """The three streams handed to the child process."""

    stdin: IO[Any] = field(default_factory=lambda: sys.stdin)
    stdout: IO[Any] = field(default_factory=lambda: sys.stdout)
    stderr: IO[Any] = field(default_factory=lambda: sys.stderr)


def build_command(name: str) -> list[str]:
    return [PACKAGE_MANAGER, "run", name]


def run_script(name: str, *, streams: StdStreams | None = None) -> int | None:
    """Announce and run ``npm run <name>``, blocking until it exits.

    Output is not captured and there is no timeout. Returns the child's exit
    code, or ``None`` when it could not be started.
    """
    streams = streams or StdStreams()
    cmd = build_command(name)
    print(f"> {' '.join(cmd)}", file=streams.stdout, flush=True)
    try:
        result = subprocess.run(
            cmd,
            stdin=streams.stdin,
            stdout=streams.stdout,
            stderr=streams.stderr,
        )
    except OSError as exc:
        logger.warning("Could not start %s: %s", PACKAGE_MANAGER, exc)
        return None
    logger.debug("%s exited with %d", " ".join(cmd), result.returncode)
    return result.returncode
