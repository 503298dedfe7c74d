"""Helpers backing the terminator."""

from .exit_waiter import wait_for_exit
from .signal_sender import Delivery, send_kill, send_terminate

__all__ = [
    "Delivery",
    "send_kill",
    "send_terminate",
    "wait_for_exit",
]
