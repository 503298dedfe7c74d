"""Shared plumbing for the start / status / stop commands."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional, Sequence

from ..config import ConfigurationError
from ..config.settings import SupervisorSettings, get_supervisor_settings
from ..errors import SupervisorError, UsageError
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)

CommandHandler = Callable[[argparse.Namespace, SupervisorSettings], int]

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def console(message: str) -> None:
    print(message, flush=True)


def console_error(message: str) -> None:
    print(message, file=sys.stderr, flush=True)


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises :class:`UsageError` instead of exiting with status 2."""

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("add_help", False)
        kwargs.setdefault("allow_abbrev", False)
        kwargs.setdefault("formatter_class", argparse.RawDescriptionHelpFormatter)
        super().__init__(*args, **kwargs)
        self.add_argument("-h", "--help", action="store_true", help="Display this help message.")

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)

    def parse_command_line(self, argv: Sequence[str]) -> argparse.Namespace:
        args, extras = self.parse_known_args(list(argv))
        if extras:
            raise UsageError.unknown_parameter(extras[0])
        return args


def add_target_arguments(parser: CommandParser) -> None:
    """``-p/--pid`` and ``-f/--file`` shared by status and stop."""
    parser.add_argument("-p", "--pid", metavar="<pid>", help="Specify the process ID of the service.")
    parser.add_argument("-f", "--file", metavar="<jar>", help="Specify the jar file name to locate the service process.")


def run_command(
    parser: CommandParser,
    handler: CommandHandler,
    argv: Optional[Sequence[str]],
    *,
    command_name: str,
) -> int:
    """Parse *argv*, run *handler* and translate failures into exit codes."""
    arguments: List[str] = list(sys.argv[1:] if argv is None else argv)
    if not arguments:
        parser.print_help(sys.stdout)
        return EXIT_FAILURE

    try:
        args = parser.parse_command_line(arguments)
        if args.help:
            parser.print_help(sys.stdout)
            return EXIT_SUCCESS
        settings = get_supervisor_settings()
        setup_logging(f"service-{command_name}", log_dir=settings.log_dir, verbose=settings.verbose)
        return handler(args, settings)
    except UsageError as exc:
        console_error(f"Error: {exc}")
        parser.print_help(sys.stderr)
        return exc.exit_code
    except SupervisorError as exc:
        logger.debug("%s failed: %s", command_name, exc)
        console_error(f"Error: {exc}")
        return exc.exit_code
    except ConfigurationError as exc:
        console_error(f"Error: {exc}")
        return EXIT_FAILURE
