"""
Root-logger setup for the supervisor commands.

The commands report to the operator through their console output function;
logging is the diagnostic channel:
- stderr handler at WARNING (DEBUG with ``SERVICE_CONTROL_VERBOSE``)
- optional ``{log_dir}/{service_name}.log`` at INFO, appended across runs and
  reopened when rotated externally
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import List, Optional

_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)

_TECHNICAL_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_BRIEF_FORMAT = "%(levelname)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that only add noise at INFO/DEBUG
_QUIET_LOGGERS = ("psutil", "asyncio")


def _detach_handlers(root_logger: logging.Logger) -> None:
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        try:
            handler.close()
        except OSError as exc:
            _MODULE_LOGGER.debug("Closing handler %r failed: %s", handler, exc)


def _stderr_handler(verbose: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if verbose:
        handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
        handler.setLevel(logging.DEBUG)
    else:
        handler.setFormatter(logging.Formatter(_BRIEF_FORMAT))
        handler.setLevel(logging.WARNING)
    return handler


def _log_file_handler(log_path: Path) -> logging.Handler:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.WatchedFileHandler(log_path, mode="a")
    handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    handler.setLevel(logging.INFO)
    return handler


def _build_handlers(service_name: Optional[str], log_dir: Optional[Path], verbose: bool) -> List[logging.Handler]:
    handlers = [_stderr_handler(verbose)]
    if service_name and log_dir is not None:
        handlers.append(_log_file_handler(Path(log_dir) / f"{service_name}.log"))
    return handlers


def setup_logging(service_name: Optional[str] = None, *, log_dir: Optional[Path] = None, verbose: bool = False) -> None:
    """Replace the root logger's handlers for one supervisor command.

    Safe to call repeatedly; earlier handlers are closed first.
    """
    with _config_lock:
        root_logger = logging.getLogger()
        _detach_handlers(root_logger)
        for handler in _build_handlers(service_name, log_dir, verbose):
            root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
