"""
Service Launcher

Starts a named service exactly once. The whole check-record / spawn /
rediscover / persist sequence runs under the per-service launch lock, so two
concurrent ``start`` invocations for one name cannot both spawn.

Usage:
    from service_control.launcher import Launcher

    launcher = Launcher(finder=ProcessFinder(), store=PidRecordStore(Path(".")),
                        builder=JavaCommandBuilder(), lock_dir=Path("."))
    result = launcher.launch(descriptor)
"""

from __future__ import annotations

import logging
import time
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .command_builder import CommandBuilder
from .config.settings import DEFAULT_LOCK_TIMEOUT_SECONDS, DEFAULT_SETTLE_SECONDS
from .descriptor import ServiceDescriptor
from .errors import DiscoveryError, LaunchError
from .instance_lock import launch_guard
from .pid_record import PidRecordStore
from .process_finder import ProcessLookup
from .spawner import Spawner, spawn_detached

logger = logging.getLogger(__name__)

GuardFactory = Callable[[str], AbstractContextManager]


@dataclass(frozen=True)
class LaunchResult:
    service_name: str
    pid: int
    already_running: bool = False


class Launcher:
    """Guards against duplicate launches, spawns detached and records the pid."""

    def __init__(
        self,
        *,
        finder: ProcessLookup,
        store: PidRecordStore,
        builder: CommandBuilder,
        lock_dir: Optional[Path] = None,
        spawner: Spawner = spawn_detached,
        settle_delay: float = DEFAULT_SETTLE_SECONDS,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        console_output_func: Callable[[str], None] = print,
        guard_factory: Optional[GuardFactory] = None,
    ) -> None:
        self.finder = finder
        self.store = store
        self.builder = builder
        self.spawner = spawner
        self.settle_delay = settle_delay
        self._sleep = sleep
        self._console = console_output_func
        if guard_factory is None:
            resolved_lock_dir = lock_dir if lock_dir is not None else store.directory

            def guard_factory(service_name: str) -> AbstractContextManager:
                return launch_guard(service_name, resolved_lock_dir, timeout=lock_timeout)

        self._guard_factory = guard_factory

    def launch(self, descriptor: ServiceDescriptor) -> LaunchResult:
        """
        Start *descriptor* unless a live recorded instance already exists.

        Raises:
            DiscoveryError: The spawned process could not be found after the
                settle delay. It may still be running, untracked.
            LaunchError: The operating system could not execute the command.
            PidRecordError: The pid file could not be written.
            LaunchLockError: Another launch of the same name held the lock
                for longer than the lock timeout.
        """
        with self._guard_factory(descriptor.name):
            running = self._running_instance(descriptor.name)
            if running is not None:
                self._console(f"Service '{descriptor.name}' is already running with PID {running}.")
                return LaunchResult(service_name=descriptor.name, pid=running, already_running=True)

            pid = self._spawn_and_discover(descriptor)
            self.store.write(descriptor.name, pid)

        self._console(f"Service '{descriptor.name}' started with PID: {pid}")
        return LaunchResult(service_name=descriptor.name, pid=pid)

    def _running_instance(self, service_name: str) -> Optional[int]:
        """Return the live recorded pid, discarding a stale record on the way."""
        if not self.store.exists(service_name):
            return None

        recorded = self.store.read(service_name)
        if recorded is not None and self.finder.is_alive(recorded):
            logger.info("Service '%s' already running with PID %s", service_name, recorded)
            return recorded

        self._console("Found stale PID file. Removing...")
        logger.info("Discarding stale PID record for '%s' (pid=%s)", service_name, recorded)
        self.store.delete(service_name)
        return None

    def _spawn_and_discover(self, descriptor: ServiceDescriptor) -> int:
        command = self.builder.build(descriptor)
        self._console("Starting service with command:")
        self._console(command.display())

        try:
            spawned_pid = self.spawner(command.argv, command.env)
        except OSError as exc:
            logger.error("Spawning %s failed: %s", command.argv[0], exc)
            raise LaunchError.spawn_failed(command.argv[0], exc.strerror or str(exc)) from exc
        logger.info("Spawned '%s' as PID %s; settling for %ss", descriptor.name, spawned_pid, self.settle_delay)
        self._sleep(self.settle_delay)

        matches = self.finder.find(str(descriptor.executable))
        if not matches:
            logger.error(
                "No process matching %s found after %ss; spawned PID %s may be running untracked",
                descriptor.executable,
                self.settle_delay,
                spawned_pid,
            )
            raise DiscoveryError.launch_not_found()
        return matches[0]


__all__ = ["LaunchResult", "Launcher"]
