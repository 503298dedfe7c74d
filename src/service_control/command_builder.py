"""Builds the Java / Spring Boot launch command for a service descriptor."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Protocol

from .config.settings import DEFAULT_HEAP_DUMP_PATH, DEFAULT_NATIVE_LIB_PATH, java_home_for
from .descriptor import ServiceDescriptor

INITIAL_HEAP = "-Xms512m"
MAX_HEAP = "-Xmx2G"


@dataclass(frozen=True)
class LaunchCommand:
    argv: List[str]
    env: Mapping[str, str] = field(default_factory=dict)

    def display(self) -> str:
        """Shell-quoted rendering for operator output only; never executed."""
        overrides = [f"{key}={shlex.quote(value)}" for key, value in self.env_overrides.items()]
        return " ".join(overrides + [shlex.quote(arg) for arg in self.argv])

    @property
    def env_overrides(self) -> Mapping[str, str]:
        return {key: value for key, value in self.env.items() if os.environ.get(key) != value}


class CommandBuilder(Protocol):
    def build(self, descriptor: ServiceDescriptor) -> LaunchCommand: ...


class JavaCommandBuilder:
    """Assembles ``java <jvm options> -jar <jar> <spring args>`` plus its environment."""

    def __init__(
        self,
        *,
        heap_dump_path: str = DEFAULT_HEAP_DUMP_PATH,
        native_lib_path: str = DEFAULT_NATIVE_LIB_PATH,
        java_home_resolver: Callable[[str], Path] = java_home_for,
        base_env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.heap_dump_path = heap_dump_path
        self.native_lib_path = native_lib_path
        self._java_home_resolver = java_home_resolver
        self._base_env = base_env

    def java_binary(self, runtime: str) -> Path:
        return self._java_home_resolver(runtime) / "bin" / "java"

    def jvm_options(self, descriptor: ServiceDescriptor) -> List[str]:
        options = [
            INITIAL_HEAP,
            MAX_HEAP,
            "-Djava.security.egd=file:/dev/urandom",
            "-XX:+HeapDumpOnOutOfMemoryError",
            f"-XX:HeapDumpPath={self.heap_dump_path}",
            f"-Djava.library.path={self.native_lib_path}",
        ]
        if descriptor.config_dir is not None:
            options.append(f"-Dlogging.config={descriptor.config_dir}/logback.xml")
        return options

    def application_args(self, descriptor: ServiceDescriptor) -> List[str]:
        args = [f"--spring.config.name={descriptor.name}"]
        if descriptor.port is not None:
            args.append(f"--server.port={descriptor.port}")
        if descriptor.profile:
            args.append(f"--spring.profiles.active={descriptor.profile}")
        if descriptor.config_dir is not None:
            args.append(f"--spring.config.location=file://{descriptor.config_dir}/")
        return args

    def environment(self, descriptor: ServiceDescriptor) -> dict[str, str]:
        env = dict(os.environ if self._base_env is None else self._base_env)
        env["spring.application.name"] = descriptor.name
        if descriptor.log_dir is not None:
            env["logging.file.path"] = str(descriptor.log_dir)
        return env

    def build(self, descriptor: ServiceDescriptor) -> LaunchCommand:
        argv = [
            str(self.java_binary(descriptor.runtime)),
            *self.jvm_options(descriptor),
            "-jar",
            str(descriptor.executable),
            *self.application_args(descriptor),
        ]
        return LaunchCommand(argv=argv, env=self.environment(descriptor))


__all__ = ["CommandBuilder", "JavaCommandBuilder", "LaunchCommand"]
