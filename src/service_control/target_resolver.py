"""Resolves the process a status or stop command acts on."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .descriptor import parse_pid
from .errors import DiscoveryError, UsageError
from .process_finder import ProcessLookup


class TargetSource(str, Enum):
    EXPLICIT = "explicit"
    PATTERN = "pattern"


@dataclass(frozen=True)
class ProcessHandle:
    pid: int
    source: TargetSource
    pattern: Optional[str] = None


def resolve_target(pid: Optional[str], pattern: Optional[str], finder: ProcessLookup) -> ProcessHandle:
    """
    Pick the target process.

    An explicit pid wins whenever it is supplied, even alongside a pattern,
    and is validated but not probed here. A pattern resolves to the lowest
    matching pid.

    Raises:
        ValidationError: The pid is not a decimal number.
        DiscoveryError: The pattern matched nothing.
        UsageError: Neither a pid nor a pattern was given.
    """
    if pid:
        return ProcessHandle(pid=parse_pid(pid), source=TargetSource.EXPLICIT)
    if pattern:
        matches = finder.find(pattern)
        if not matches:
            raise DiscoveryError.pattern_not_found(pattern)
        return ProcessHandle(pid=matches[0], source=TargetSource.PATTERN, pattern=pattern)
    raise UsageError.missing_target()


__all__ = ["ProcessHandle", "TargetSource", "resolve_target"]
