"""Command-line entry points."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from . import start, status, stop

COMMANDS = {
    "start": start.main,
    "status": status.main,
    "stop": stop.main,
}

_USAGE = "Usage: python -m service_control {start|status|stop} [options]"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Dispatch ``<command> [options]`` to the matching command."""
    arguments = list(sys.argv[1:] if argv is None else argv)
    if not arguments or arguments[0] not in COMMANDS:
        if arguments and arguments[0] in ("-h", "--help"):
            print(_USAGE)
            return 0
        print(_USAGE, file=sys.stderr)
        return 1
    return COMMANDS[arguments[0]](arguments[1:])


def main_start() -> None:
    sys.exit(start.main())


def main_status() -> None:
    sys.exit(status.main())


def main_stop() -> None:
    sys.exit(stop.main())


__all__ = ["COMMANDS", "main", "main_start", "main_status", "main_stop"]
