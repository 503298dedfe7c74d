"""``service-start``: launch a Java service once per service name."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from ..command_builder import JavaCommandBuilder
from ..config.settings import SUPPORTED_JAVA_VERSIONS, SupervisorSettings
from ..descriptor import build_descriptor
from ..errors import UsageError
from ..launcher import Launcher
from ..pid_record import PidRecordStore
from ..process_finder import ProcessFinder
from ..spawner import spawn_detached
from .common import EXIT_SUCCESS, CommandParser, console, run_command

_EPILOG = """\
Example:
  service-start -j 17 -n my-service -f /opt/myapp/myapp.jar -p 8080 -r prod -l /var/log/myapp -c /opt/myapp/config
"""


def build_parser() -> CommandParser:
    parser = CommandParser(
        prog="service-start",
        description="Start a Java (Spring Boot) service unless it is already running.",
        epilog=_EPILOG,
    )
    versions = " or ".join(SUPPORTED_JAVA_VERSIONS)
    parser.add_argument("-j", "--java", metavar="<version>", help=f"Java version to use ({versions}).")
    parser.add_argument("-n", "--name", metavar="<service name>", help="Service name. Default: jar filename without extension.")
    parser.add_argument("-f", "--file", metavar="<path/to/app.jar>", help="Path to the jar file to execute. (Mandatory)")
    parser.add_argument("-p", "--port", metavar="<port>", help="Port for Spring Boot to listen on (0-65535). Optional.")
    parser.add_argument("-r", "--profile", metavar="<profile>", help="Active Spring Boot profile. Optional.")
    parser.add_argument("-l", "--log", metavar="<path/to/log/dir>", help="Directory where logs will be saved. Optional.")
    parser.add_argument("-c", "--config-dir", metavar="<conf_dir>", help="Directory for external configuration. Optional.")
    return parser


def _start(args: argparse.Namespace, settings: SupervisorSettings) -> int:
    if not args.file:
        raise UsageError.missing_file()

    descriptor = build_descriptor(
        executable=args.file,
        runtime=args.java if args.java is not None else settings.default_java_version,
        name=args.name,
        port=args.port,
        profile=args.profile,
        log_dir=args.log,
        config_dir=args.config_dir,
    )
    launcher = Launcher(
        finder=ProcessFinder(),
        store=PidRecordStore(settings.pid_dir),
        builder=JavaCommandBuilder(heap_dump_path=settings.heap_dump_path, native_lib_path=settings.native_lib_path),
        lock_dir=settings.lock_dir,
        spawner=spawn_detached,
        settle_delay=settings.settle_seconds,
        lock_timeout=settings.lock_timeout_seconds,
        console_output_func=console,
    )
    launcher.launch(descriptor)
    return EXIT_SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_command(build_parser(), _start, argv, command_name="start")
