from __future__ import annotations

import subprocess
import sys
from typing import Dict, List, Optional, Set

import pytest

from service_control.terminator_helpers import Delivery

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals required")


class FakeProcessTable:
    """In-memory process table satisfying the ProcessLookup protocol."""

    def __init__(self, processes: Optional[Dict[int, str]] = None) -> None:
        self.processes: Dict[int, str] = dict(processes or {})
        self.ignores_sigterm: Set[int] = set()
        self.unkillable: Set[int] = set()
        self.signals: List[tuple[str, int]] = []
        self.find_calls: List[str] = []

    def add(self, pid: int, command_line: str) -> None:
        self.processes[pid] = command_line

    def find(self, pattern: str) -> List[int]:
        self.find_calls.append(pattern)
        return sorted(pid for pid, cmdline in self.processes.items() if pattern in cmdline)

    def is_alive(self, pid: int) -> bool:
        return pid in self.processes

    def terminate(self, pid: int) -> Delivery:
        self.signals.append(("SIGTERM", pid))
        if pid not in self.processes:
            return Delivery.GONE
        if pid not in self.ignores_sigterm:
            del self.processes[pid]
        return Delivery.SENT

    def kill(self, pid: int) -> Delivery:
        self.signals.append(("SIGKILL", pid))
        if pid not in self.processes:
            return Delivery.GONE
        if pid not in self.unkillable:
            del self.processes[pid]
        return Delivery.SENT


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.calls)


def spawn_sleeper(marker: str, *, ignore_sigterm: bool = False, seconds: int = 60) -> subprocess.Popen:
    """Start a child python process whose command line contains *marker*.

    Blocks until the child reports that its signal disposition is in place.
    """
    setup = "import signal; signal.signal(signal.SIGTERM, signal.SIG_IGN); " if ignore_sigterm else ""
    code = f"{setup}import sys, time; print('ready', flush=True); time.sleep({seconds})"
    proc = subprocess.Popen(
        [sys.executable, "-c", code, marker],
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
    )
    assert proc.stdout is not None
    proc.stdout.readline()
    return proc


def reap(proc: subprocess.Popen) -> None:
    if proc.poll() is None:
        proc.kill()
    proc.wait(timeout=10)
    if proc.stdout is not None:
        proc.stdout.close()
