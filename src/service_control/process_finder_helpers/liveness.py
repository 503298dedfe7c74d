"""PID liveness probing."""

from __future__ import annotations

import logging

import psutil

logger = logging.getLogger(__name__)


def pid_is_alive(pid: int) -> bool:
    """
    Check whether *pid* refers to a live process.

    Mirrors ``kill -0``: a process owned by another user still exists, so
    permission errors count as alive. Zombies have already exited and are
    reported as dead, as are pid 0 (the caller's process group, not a
    process), negative ids and ids the platform cannot represent.
    """
    if pid <= 0:
        return False
    try:
        if not psutil.pid_exists(pid):
            return False
    except (OverflowError, ValueError):
        return False

    try:
        return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
    except psutil.ZombieProcess:
        return False
    except psutil.NoSuchProcess:
        return False
    except psutil.AccessDenied:
        logger.debug("Access denied inspecting PID %s; treating as alive", pid)
        return True
