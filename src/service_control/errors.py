"""Error types raised by the supervisor components."""

from __future__ import annotations


class SupervisorError(RuntimeError):
    """Base class for failures reported to the invoker with a non-zero exit status."""

    exit_code = 1


class UsageError(SupervisorError):
    """Missing, unknown or conflicting command-line arguments."""

    @classmethod
    def unknown_parameter(cls, parameter: str) -> "UsageError":
        return cls(f"Unknown parameter: {parameter}")

    @classmethod
    def missing_file(cls) -> "UsageError":
        return cls("The --file parameter is mandatory.")

    @classmethod
    def missing_target(cls) -> "UsageError":
        return cls("You must provide either a PID or a jar file name.")


class ValidationError(SupervisorError):
    """Malformed input value; never retried."""

    @classmethod
    def executable_missing(cls, path: str) -> "ValidationError":
        return cls(f"Jar file '{path}' does not exist.")

    @classmethod
    def executable_unreadable(cls, path: str) -> "ValidationError":
        return cls(f"Jar file '{path}' is not readable.")

    @classmethod
    def invalid_port(cls) -> "ValidationError":
        return cls("Port must be a numeric value between 0 and 65535.")

    @classmethod
    def unsupported_runtime(cls, supported) -> "ValidationError":
        return cls(f"Java version must be {' or '.join(supported)}.")

    @classmethod
    def invalid_name(cls) -> "ValidationError":
        return cls("Service name must start with a letter and contain no spaces.")

    @classmethod
    def invalid_pid(cls) -> "ValidationError":
        return cls("PID must be a numeric value.")

    @classmethod
    def empty_pattern(cls) -> "ValidationError":
        return cls("Search pattern must not be empty.")


class DiscoveryError(SupervisorError):
    """A process could not be located in the process table."""

    @classmethod
    def pid_not_running(cls, pid: int) -> "DiscoveryError":
        return cls(f"No process with PID {pid} is running.")

    @classmethod
    def pattern_not_found(cls, pattern: str) -> "DiscoveryError":
        return cls(f"No running process found for jar file '{pattern}'.")

    @classmethod
    def launch_not_found(cls) -> "DiscoveryError":
        return cls("Failed to start service.")


class LaunchError(SupervisorError):
    """The operating system refused to start the service process."""

    @classmethod
    def spawn_failed(cls, program: str, reason: str) -> "LaunchError":
        return cls(f"Failed to start service: cannot execute '{program}' ({reason}).")


class PidRecordError(SupervisorError):
    """A PID file could not be written or removed."""

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "PidRecordError":
        return cls(f"Cannot write PID file '{path}' ({reason}).")

    @classmethod
    def delete_failed(cls, path: str, reason: str) -> "PidRecordError":
        return cls(f"Cannot remove PID file '{path}' ({reason}).")


class TerminationError(SupervisorError):
    """The target survived the forceful kill step."""

    def __init__(self, message: str, *, pid: int) -> None:
        super().__init__(message)
        self.pid = pid

    @classmethod
    def survived_kill(cls, pid: int) -> "TerminationError":
        return cls(f"Failed to kill process {pid}.", pid=pid)


class LaunchLockError(SupervisorError):
    """The per-service launch lock could not be obtained."""

    @classmethod
    def timed_out(cls, service_name: str, timeout: float) -> "LaunchLockError":
        return cls(f"Timed out after {timeout:g}s waiting for the launch lock of service '{service_name}'.")

    @classmethod
    def unavailable(cls, path: str, reason: str) -> "LaunchLockError":
        return cls(f"Cannot open launch lock '{path}' ({reason}).")

    @classmethod
    def unsupported_platform(cls) -> "LaunchLockError":
        return cls("Launch locking requires fcntl on this platform.")


__all__ = [
    "DiscoveryError",
    "LaunchError",
    "LaunchLockError",
    "PidRecordError",
    "SupervisorError",
    "TerminationError",
    "UsageError",
    "ValidationError",
]
