"""
Process Finder

Locates running processes by command-line substring and probes pid
liveness. Used by the launcher to rediscover a freshly spawned service and
by the status/stop commands to resolve their target.

Usage:
    from service_control.process_finder import ProcessFinder

    finder = ProcessFinder()
    pids = finder.find("/opt/app/app.jar")   # ascending, may be empty
    finder.is_alive(pids[0])
"""

from __future__ import annotations

import os
from typing import Iterable, List, Optional, Protocol

from .errors import ValidationError
from .process_finder_helpers import find_matching_pids, pid_is_alive, scan_command_lines


class ProcessLookup(Protocol):
    """Minimal contract consumed by the launcher, prober and terminator."""

    def find(self, pattern: str) -> List[int]: ...

    def is_alive(self, pid: int) -> bool: ...


class ProcessFinder:
    """psutil-backed :class:`ProcessLookup`.

    The calling process is never reported as a match, since its own command
    line normally contains the pattern it was asked to look for.
    """

    def __init__(self, exclude_pids: Optional[Iterable[int]] = None) -> None:
        if exclude_pids is None:
            exclude_pids = (os.getpid(),)
        self._excluded = frozenset(exclude_pids)

    def find(self, pattern: str) -> List[int]:
        if not pattern:
            raise ValidationError.empty_pattern()
        return find_matching_pids(pattern, scan_command_lines(), exclude=self._excluded)

    def is_alive(self, pid: int) -> bool:
        return pid_is_alive(pid)


__all__ = ["ProcessFinder", "ProcessLookup"]
