"""``service-status``: report whether a service process is running."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from ..config.settings import SupervisorSettings
from ..process_finder import ProcessFinder
from ..status_prober import StatusProber
from .common import EXIT_FAILURE, EXIT_SUCCESS, CommandParser, add_target_arguments, console, run_command

_EPILOG = """\
If both --pid and --file are given, --pid is used.

Examples:
  service-status -p 12345
  service-status --file=my-app.jar
"""


def build_parser() -> CommandParser:
    parser = CommandParser(
        prog="service-status",
        description="Check the status of a running Java (Spring Boot) service.",
        epilog=_EPILOG,
    )
    add_target_arguments(parser)
    return parser


def _status(args: argparse.Namespace, settings: SupervisorSettings) -> int:
    report = StatusProber(ProcessFinder(), console_output_func=console).probe(pid=args.pid, pattern=args.file)
    return EXIT_SUCCESS if report.alive else EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_command(build_parser(), _status, argv, command_name="status")
