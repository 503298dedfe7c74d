from __future__ import annotations

"""Supervisor settings resolved from the environment."""


from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from . import ConfigurationError, env_bool, env_seconds, env_str

DEFAULT_SETTLE_SECONDS = 2.0
DEFAULT_GRACE_SECONDS = 5.0
DEFAULT_KILL_SETTLE_SECONDS = 1.0
DEFAULT_POLL_SECONDS = 0.1
DEFAULT_LOCK_TIMEOUT_SECONDS = 10.0
DEFAULT_JAVA_VERSION = "13"
SUPPORTED_JAVA_VERSIONS = ("13", "17")
DEFAULT_HEAP_DUMP_PATH = "/tmp"
DEFAULT_NATIVE_LIB_PATH = "/opt/mqm/java/lib64:/var/mqm/exits64"


@dataclass(frozen=True)
class SupervisorSettings:
    pid_dir: Path
    lock_dir: Path
    settle_seconds: float
    grace_seconds: float
    kill_settle_seconds: float
    poll_seconds: float
    lock_timeout_seconds: float
    default_java_version: str
    heap_dump_path: str
    native_lib_path: str
    log_dir: Optional[Path]
    verbose: bool


@lru_cache(maxsize=1)
def get_supervisor_settings() -> SupervisorSettings:
    pid_dir = Path(env_str("SERVICE_CONTROL_PID_DIR", or_value=".")).expanduser()
    lock_dir_value = env_str("SERVICE_CONTROL_LOCK_DIR")
    lock_dir = Path(lock_dir_value).expanduser() if lock_dir_value else pid_dir

    poll_seconds = env_seconds("SERVICE_CONTROL_POLL_SECONDS", or_value=DEFAULT_POLL_SECONDS)
    if poll_seconds == 0:
        raise ConfigurationError.invalid_value("SERVICE_CONTROL_POLL_SECONDS", poll_seconds, "Must be greater than zero")

    default_java = env_str("SERVICE_CONTROL_DEFAULT_JAVA", or_value=DEFAULT_JAVA_VERSION)
    if default_java not in SUPPORTED_JAVA_VERSIONS:
        raise ConfigurationError.invalid_value(
            "SERVICE_CONTROL_DEFAULT_JAVA", default_java, f"Supported versions: {', '.join(SUPPORTED_JAVA_VERSIONS)}"
        )

    log_dir_value = env_str("SERVICE_CONTROL_LOG_DIR")

    return SupervisorSettings(
        pid_dir=pid_dir,
        lock_dir=lock_dir,
        settle_seconds=float(env_seconds("SERVICE_CONTROL_SETTLE_SECONDS", or_value=DEFAULT_SETTLE_SECONDS)),
        grace_seconds=float(env_seconds("SERVICE_CONTROL_GRACE_SECONDS", or_value=DEFAULT_GRACE_SECONDS)),
        kill_settle_seconds=float(env_seconds("SERVICE_CONTROL_KILL_SETTLE_SECONDS", or_value=DEFAULT_KILL_SETTLE_SECONDS)),
        poll_seconds=float(poll_seconds),
        lock_timeout_seconds=float(env_seconds("SERVICE_CONTROL_LOCK_TIMEOUT_SECONDS", or_value=DEFAULT_LOCK_TIMEOUT_SECONDS)),
        default_java_version=default_java,
        heap_dump_path=env_str("SERVICE_CONTROL_HEAP_DUMP_PATH", or_value=DEFAULT_HEAP_DUMP_PATH),
        native_lib_path=env_str("SERVICE_CONTROL_NATIVE_LIB_PATH", or_value=DEFAULT_NATIVE_LIB_PATH),
        log_dir=Path(log_dir_value).expanduser() if log_dir_value else None,
        verbose=bool(env_bool("SERVICE_CONTROL_VERBOSE", or_value=False)),
    )


def java_home_for(version: str) -> Path:
    """Return the JVM installation for *version*, honouring ``JAVA_HOME_<version>``."""
    configured = env_str(f"JAVA_HOME_{version}")
    if configured:
        return Path(configured).expanduser()
    return Path(f"/usr/lib/jvm/java-{version}-openjdk")


__all__ = [
    "DEFAULT_JAVA_VERSION",
    "SUPPORTED_JAVA_VERSIONS",
    "SupervisorSettings",
    "get_supervisor_settings",
    "java_home_for",
]
