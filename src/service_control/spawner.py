"""Detached process spawning."""

from __future__ import annotations

import logging
import subprocess
from typing import Mapping, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


class Spawner(Protocol):
    def __call__(self, argv: Sequence[str], env: Optional[Mapping[str, str]] = None) -> int: ...


def spawn_detached(argv: Sequence[str], env: Optional[Mapping[str, str]] = None) -> int:
    """Launch *argv* in a new session with stdio on /dev/null and return its pid.

    The argument vector is executed directly, never through a shell, and the
    child is not waited on.
    """
    proc = subprocess.Popen(  # noqa: S603
        list(argv),
        env=dict(env) if env is not None else None,
        start_new_session=True,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        close_fds=True,
    )
    logger.debug("Spawned detached process %s: %s", proc.pid, argv[0])
    return proc.pid


__all__ = ["Spawner", "spawn_detached"]
