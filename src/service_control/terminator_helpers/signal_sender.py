"""Delivers termination signals through psutil."""

from __future__ import annotations

import logging
from enum import Enum

import psutil

logger = logging.getLogger(__name__)


class Delivery(str, Enum):
    SENT = "sent"
    GONE = "gone"
    DENIED = "denied"


def _deliver(pid: int, *, force: bool) -> Delivery:
    signal_name = "SIGKILL" if force else "SIGTERM"
    try:
        proc = psutil.Process(pid)
        if force:
            proc.kill()
        else:
            proc.terminate()
    except psutil.NoSuchProcess:
        logger.debug("PID %s exited before %s could be delivered", pid, signal_name)
        return Delivery.GONE
    except psutil.AccessDenied:
        logger.warning("Permission denied sending %s to PID %s", signal_name, pid)
        return Delivery.DENIED
    logger.info("Sent %s to PID %s", signal_name, pid)
    return Delivery.SENT


def send_terminate(pid: int) -> Delivery:
    """Ask *pid* to shut down cooperatively (SIGTERM)."""
    return _deliver(pid, force=False)


def send_kill(pid: int) -> Delivery:
    """Kill *pid* unconditionally (SIGKILL)."""
    return _deliver(pid, force=True)
