from __future__ import annotations

"""File-lock guard serialising launches of the same service name."""

import logging
import os
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from .errors import LaunchLockError

try:
    import fcntl
except ImportError:  # pragma: no cover - fcntl unavailable on non-POSIX platforms
    fcntl = None

logger = logging.getLogger(__name__)

LOCK_RETRY_INTERVAL_SECONDS = 0.05


class LaunchLock:
    """Exclusive ``flock`` on ``<lock_dir>/<service_name>.lock``.

    The lock file is never unlinked so every launcher contends on the same inode.
    """

    def __init__(
        self,
        service_name: str,
        lock_dir: Path,
        *,
        timeout: float,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.service_name = service_name
        self.lock_path = Path(lock_dir) / f"{service_name}.lock"
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock
        self._fd: Optional[int] = None

    @property
    def held(self) -> bool:
        return self._fd is not None

    def acquire(self) -> None:
        """Wait up to ``timeout`` seconds for the lock; raises when it stays busy."""

        if fcntl is None:  # pragma: no cover - non-POSIX platforms
            raise LaunchLockError.unsupported_platform()

        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.lock_path, os.O_RDWR | os.O_CREAT, 0o664)
        except OSError as exc:
            raise LaunchLockError.unavailable(str(self.lock_path), exc.strerror or str(exc)) from exc
        deadline = self._clock() + self.timeout
        while True:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if self._clock() >= deadline:
                    os.close(fd)
                    raise LaunchLockError.timed_out(self.service_name, self.timeout) from None
                logger.debug("Launch lock %s busy; retrying", self.lock_path)
                self._sleep(LOCK_RETRY_INTERVAL_SECONDS)

        os.ftruncate(fd, 0)
        os.write(fd, str(os.getpid()).encode("utf-8"))
        self._fd = fd
        logger.debug("Acquired launch lock %s", self.lock_path)

    def release(self) -> None:
        if self._fd is None:
            return
        try:
            if fcntl is not None:
                fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None
        logger.debug("Released launch lock %s", self.lock_path)


@contextmanager
def launch_guard(service_name: str, lock_dir: Path, *, timeout: float) -> Iterator[LaunchLock]:
    """Context manager holding the launch lock for *service_name*."""

    lock = LaunchLock(service_name, lock_dir, timeout=timeout)
    lock.acquire()
    try:
        yield lock
    finally:
        lock.release()


__all__ = ["LaunchLock", "launch_guard"]
