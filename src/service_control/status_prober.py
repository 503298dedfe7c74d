"""Read-only liveness reporting for a service process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import DiscoveryError
from .process_finder import ProcessLookup
from .target_resolver import ProcessHandle, TargetSource, resolve_target

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusReport:
    handle: Optional[ProcessHandle]
    alive: bool


class StatusProber:
    def __init__(self, finder: ProcessLookup, *, console_output_func: Callable[[str], None] = print) -> None:
        self.finder = finder
        self._console = console_output_func

    def probe(self, pid: Optional[str] = None, pattern: Optional[str] = None) -> StatusReport:
        try:
            handle = resolve_target(pid, pattern, self.finder)
        except DiscoveryError as exc:
            self._console(str(exc))
            return StatusReport(handle=None, alive=False)

        if handle.source is TargetSource.PATTERN:
            self._console(f"Service found for jar file '{handle.pattern}' with PID {handle.pid}.")
            return StatusReport(handle=handle, alive=True)

        alive = self.finder.is_alive(handle.pid)
        if alive:
            self._console(f"Service is running with PID {handle.pid}.")
        else:
            self._console(f"No running process found with PID {handle.pid}.")
        logger.debug("Status of PID %s: alive=%s", handle.pid, alive)
        return StatusReport(handle=handle, alive=alive)


__all__ = ["StatusProber", "StatusReport"]
