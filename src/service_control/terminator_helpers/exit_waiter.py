"""Bounded waiting for a process to exit."""

from __future__ import annotations

import math
from typing import Callable


def wait_for_exit(
    pid: int,
    timeout: float,
    *,
    is_alive: Callable[[int], bool],
    sleep: Callable[[float], None],
    poll_interval: float,
) -> bool:
    """Sleep in ``poll_interval`` slices for at most *timeout* seconds.

    Returns ``True`` as soon as *pid* is no longer alive and ``False`` if it
    is still alive once the full timeout has elapsed. A zero timeout probes
    once without sleeping.
    """
    if poll_interval <= 0:
        raise ValueError(f"poll_interval must be positive (got {poll_interval})")
    if timeout <= 0:
        return not is_alive(pid)

    steps = max(1, math.ceil(timeout / poll_interval))
    step = timeout / steps
    for _ in range(steps):
        sleep(step)
        if not is_alive(pid):
            return True
    return False
