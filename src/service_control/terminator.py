"""
Process Terminator

Stops a process with a single graceful-then-forceful escalation:

    RUNNING -> SIGTERM -> wait(grace) -> TERMINATED
                                      -> SIGKILL -> wait(settle) -> TERMINATED (forced)
                                                                 -> FAILED

There is no retry beyond the one escalation; a FAILED shutdown raises
:class:`~service_control.errors.TerminationError` and the operator has to
re-invoke.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .config.settings import DEFAULT_GRACE_SECONDS, DEFAULT_KILL_SETTLE_SECONDS, DEFAULT_POLL_SECONDS
from .errors import DiscoveryError, TerminationError
from .process_finder import ProcessLookup
from .target_resolver import ProcessHandle, TargetSource, resolve_target
from .terminator_helpers import Delivery, send_kill, send_terminate, wait_for_exit

logger = logging.getLogger(__name__)

SignalFunc = Callable[[int], Delivery]


class ShutdownState(str, Enum):
    RUNNING = "running"
    STILL_ALIVE = "still_alive"
    TERMINATED = "terminated"
    FAILED = "failed"


@dataclass(frozen=True)
class ShutdownOutcome:
    pid: int
    state: ShutdownState
    forced: bool = False


class Terminator:
    def __init__(
        self,
        finder: ProcessLookup,
        *,
        grace_period: float = DEFAULT_GRACE_SECONDS,
        kill_settle: float = DEFAULT_KILL_SETTLE_SECONDS,
        poll_interval: float = DEFAULT_POLL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        terminate_func: SignalFunc = send_terminate,
        kill_func: SignalFunc = send_kill,
        console_output_func: Callable[[str], None] = print,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive (got {poll_interval})")
        self.finder = finder
        self.grace_period = grace_period
        self.kill_settle = kill_settle
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._terminate = terminate_func
        self._kill = kill_func
        self._console = console_output_func

    def stop(self, pid: Optional[str] = None, pattern: Optional[str] = None) -> ShutdownOutcome:
        """Resolve the target (explicit pid first, then pattern) and shut it down."""
        handle = self.resolve(pid, pattern)
        return self.shutdown(handle.pid)

    def resolve(self, pid: Optional[str], pattern: Optional[str]) -> ProcessHandle:
        handle = resolve_target(pid, pattern, self.finder)
        if handle.source is TargetSource.EXPLICIT:
            if not self.finder.is_alive(handle.pid):
                raise DiscoveryError.pid_not_running(handle.pid)
        else:
            self._console(f"Found process with PID {handle.pid} for jar file '{handle.pattern}'.")
        return handle

    def shutdown(self, pid: int) -> ShutdownOutcome:
        state = ShutdownState.RUNNING
        self._console(f"Attempting to gracefully stop process with PID {pid}...")
        self._terminate(pid)

        if self._wait(pid, self.grace_period):
            state = ShutdownState.TERMINATED
            self._console(f"Process {pid} terminated gracefully.")
            logger.info("PID %s: %s after SIGTERM", pid, state.value)
            return ShutdownOutcome(pid=pid, state=state)

        state = ShutdownState.STILL_ALIVE
        logger.warning("PID %s still alive after %ss grace period; escalating", pid, self.grace_period)
        self._console(f"Process {pid} did not terminate gracefully; sending SIGKILL...")
        self._kill(pid)

        if self._wait(pid, self.kill_settle):
            state = ShutdownState.TERMINATED
            self._console(f"Process {pid} has been forcefully killed.")
            logger.info("PID %s: %s after SIGKILL", pid, state.value)
            return ShutdownOutcome(pid=pid, state=state, forced=True)

        state = ShutdownState.FAILED
        logger.error("PID %s survived SIGKILL; state=%s", pid, state.value)
        raise TerminationError.survived_kill(pid)

    def _wait(self, pid: int, timeout: float) -> bool:
        return wait_for_exit(
            pid,
            timeout,
            is_alive=self.finder.is_alive,
            sleep=self._sleep,
            poll_interval=self.poll_interval,
        )


__all__ = ["ShutdownOutcome", "ShutdownState", "Terminator"]
