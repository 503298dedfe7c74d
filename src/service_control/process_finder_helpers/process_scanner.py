"""Process table scanning."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

import psutil

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessEntry:
    pid: int
    command_line: str


def join_command_line(cmdline: Sequence[str] | None) -> str:
    """Render an argument vector the way ``ps -o args`` shows it."""
    if not cmdline:
        return ""
    return " ".join(str(arg) for arg in cmdline)


def scan_command_lines() -> Iterator[ProcessEntry]:
    """Yield every visible process with its full command line.

    Processes that exit or deny access while being inspected are skipped;
    psutil reports an inaccessible cmdline as ``None``.
    """
    for proc in psutil.process_iter(["pid", "cmdline"]):
        try:
            pid = proc.info["pid"]
            command_line = join_command_line(proc.info.get("cmdline"))
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
        if not command_line:
            continue
        yield ProcessEntry(pid=pid, command_line=command_line)


def find_matching_pids(pattern: str, entries: Iterator[ProcessEntry] | Sequence[ProcessEntry], *, exclude: frozenset[int] = frozenset()) -> list[int]:
    """Return ascending pids whose command line contains *pattern* literally."""
    matched = {entry.pid for entry in entries if pattern in entry.command_line and entry.pid not in exclude}
    logger.debug("Pattern %r matched %d processes", pattern, len(matched))
    return sorted(matched)
