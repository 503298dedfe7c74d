"""Helpers backing the process finder."""

from .liveness import pid_is_alive
from .process_scanner import ProcessEntry, find_matching_pids, join_command_line, scan_command_lines

__all__ = [
    "ProcessEntry",
    "find_matching_pids",
    "join_command_line",
    "pid_is_alive",
    "scan_command_lines",
]
