"""``service-stop``: stop a service process, escalating to SIGKILL if needed."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from ..config.settings import SupervisorSettings
from ..errors import PidRecordError
from ..pid_record import PidRecordStore
from ..process_finder import ProcessFinder
from ..terminator import Terminator
from .common import EXIT_SUCCESS, CommandParser, add_target_arguments, console, run_command

logger = logging.getLogger(__name__)

_EPILOG = """\
The process receives SIGTERM first and SIGKILL if it is still running after
the grace period. If both --pid and --file are given, --pid is used.

Examples:
  service-stop -p 12345
  service-stop --file=my-app.jar
"""


def build_parser() -> CommandParser:
    parser = CommandParser(
        prog="service-stop",
        description="Stop (or kill) a running Java (Spring Boot) service.",
        epilog=_EPILOG,
    )
    add_target_arguments(parser)
    return parser


def _stop(args: argparse.Namespace, settings: SupervisorSettings) -> int:
    terminator = Terminator(
        ProcessFinder(),
        grace_period=settings.grace_seconds,
        kill_settle=settings.kill_settle_seconds,
        poll_interval=settings.poll_seconds,
        console_output_func=console,
    )
    outcome = terminator.stop(pid=args.pid, pattern=args.file)

    try:
        removed = PidRecordStore(settings.pid_dir).discard_pid(outcome.pid)
    except PidRecordError as exc:
        logger.warning("Process %s stopped but its PID record was kept: %s", outcome.pid, exc)
        return EXIT_SUCCESS
    for service_name in removed:
        logger.info("Removed PID record of '%s' after stopping PID %s", service_name, outcome.pid)
    return EXIT_SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_command(build_parser(), _stop, argv, command_name="stop")
