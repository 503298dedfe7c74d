"""Per-service PID marker files (``<service-name>.pid``)."""

from __future__ import annotations

import contextlib
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import List, Optional

from .errors import PidRecordError

logger = logging.getLogger(__name__)

PID_FILE_SUFFIX = ".pid"
_DECIMAL_PID = re.compile(r"^[0-9]+$")


class PidRecordStore:
    """Reads and writes one decimal pid per service name inside a directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, service_name: str) -> Path:
        return self.directory / f"{service_name}{PID_FILE_SUFFIX}"

    def exists(self, service_name: str) -> bool:
        return self.path_for(service_name).is_file()

    def read(self, service_name: str) -> Optional[int]:
        """
        Return the recorded pid, or ``None`` when there is no usable record.

        A record that cannot be read or does not hold a single decimal pid
        carries no authority and is reported as absent.
        """
        path = self.path_for(service_name)
        try:
            content = path.read_text().strip()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Unable to read PID file %s: %s", path, exc)
            return None

        if not _DECIMAL_PID.match(content):
            logger.warning("Ignoring malformed PID file %s (content=%r)", path, content[:40])
            return None
        return int(content)

    def write(self, service_name: str, pid: int) -> Path:
        """Atomically replace the record for *service_name* with *pid*."""
        path = self.path_for(service_name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{service_name}.", suffix=".tmp")
        except OSError as exc:
            raise PidRecordError.write_failed(str(path), exc.strerror or str(exc)) from exc
        closed = False
        try:
            os.write(fd, f"{pid}\n".encode("ascii"))
            os.close(fd)
            closed = True
            os.replace(tmp, path)
        except BaseException as exc:
            if not closed:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                os.unlink(tmp)
            if isinstance(exc, OSError):
                raise PidRecordError.write_failed(str(path), exc.strerror or str(exc)) from exc
            raise
        logger.info("Recorded PID %s for service '%s' in %s", pid, service_name, path)
        return path

    def delete(self, service_name: str) -> bool:
        path = self.path_for(service_name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise PidRecordError.delete_failed(str(path), exc.strerror or str(exc)) from exc
        logger.info("Removed PID file %s", path)
        return True

    def service_names(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(entry.stem for entry in self.directory.glob(f"*{PID_FILE_SUFFIX}") if entry.is_file())

    def discard_pid(self, pid: int) -> List[str]:
        """Remove every record naming *pid*; returns the affected service names."""
        removed = []
        for service_name in self.service_names():
            if self.read(service_name) == pid and self.delete(service_name):
                removed.append(service_name)
        return removed


__all__ = ["PID_FILE_SUFFIX", "PidRecordStore"]
