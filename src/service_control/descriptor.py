"""Service descriptor and input validation."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Optional

from .config.settings import SUPPORTED_JAVA_VERSIONS
from .errors import ValidationError

MAX_PORT = 65535

_DECIMAL = re.compile(r"[0-9]+")
_SERVICE_NAME = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")


@dataclass(frozen=True)
class ServiceDescriptor:
    """Everything the launcher needs to start one named service."""

    name: str
    executable: Path
    runtime: str
    port: Optional[int] = None
    profile: Optional[str] = None
    log_dir: Optional[Path] = None
    config_dir: Optional[Path] = None


def parse_pid(raw: str) -> int:
    """Accept exactly the strings made of ASCII digits."""
    if not isinstance(raw, str) or not _DECIMAL.fullmatch(raw):
        raise ValidationError.invalid_pid()
    return int(raw)


def validate_executable(path: Path) -> None:
    if not path.is_file():
        raise ValidationError.executable_missing(str(path))
    if not os.access(path, os.R_OK):
        raise ValidationError.executable_unreadable(str(path))


def parse_port(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    if not _DECIMAL.fullmatch(str(raw)):
        raise ValidationError.invalid_port()
    port = int(raw)
    if port > MAX_PORT:
        raise ValidationError.invalid_port()
    return port


def validate_runtime(runtime: str, supported: Collection[str] = SUPPORTED_JAVA_VERSIONS) -> None:
    if runtime not in supported:
        raise ValidationError.unsupported_runtime(sorted(supported))


def validate_service_name(name: str) -> None:
    if not _SERVICE_NAME.fullmatch(name):
        raise ValidationError.invalid_name()


def derive_service_name(executable: Path) -> str:
    """Default service name: the executable's base name without its extension."""
    return Path(executable).stem


def build_descriptor(
    *,
    executable: str,
    runtime: str,
    name: Optional[str] = None,
    port: Optional[str] = None,
    profile: Optional[str] = None,
    log_dir: Optional[str] = None,
    config_dir: Optional[str] = None,
    supported_runtimes: Collection[str] = SUPPORTED_JAVA_VERSIONS,
) -> ServiceDescriptor:
    """
    Validate raw invocation input and freeze it into a descriptor.

    Checks run in a fixed order and the first failure is raised:
    executable, port, runtime, then service name.
    """
    executable_path = Path(executable)
    validate_executable(executable_path)
    parsed_port = parse_port(port)
    validate_runtime(runtime, supported_runtimes)

    service_name = name if name else derive_service_name(executable_path)
    validate_service_name(service_name)

    return ServiceDescriptor(
        name=service_name,
        executable=executable_path,
        runtime=runtime,
        port=parsed_port,
        profile=profile or None,
        log_dir=Path(log_dir) if log_dir else None,
        config_dir=Path(config_dir) if config_dir else None,
    )


__all__ = [
    "MAX_PORT",
    "ServiceDescriptor",
    "build_descriptor",
    "derive_service_name",
    "parse_pid",
    "parse_port",
    "validate_executable",
    "validate_runtime",
    "validate_service_name",
]
