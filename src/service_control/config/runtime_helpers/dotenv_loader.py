"""Reads ``KEY=value`` settings files used as fallbacks for the environment."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from ..errors import ConfigurationError

_EXPORT_PREFIX = "export "
_QUOTES = ("'", '"')


def parse_dotenv_line(line: str) -> Optional[Tuple[str, str]]:
    """Return ``(key, value)`` for an assignment line, ``None`` for anything else.

    Accepts shell-style ``export KEY=value`` and strips one pair of matching
    quotes around the value.
    """
    stripped = line.strip()
    if stripped.startswith(_EXPORT_PREFIX):
        stripped = stripped[len(_EXPORT_PREFIX) :].lstrip()
    if not stripped or stripped.startswith("#") or "=" not in stripped:
        return None

    key, raw_value = stripped.split("=", 1)
    key = key.strip()
    if not key:
        return None
    value = raw_value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        value = value[1:-1]
    return key, value


def parse_dotenv(lines: Iterable[str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for line in lines:
        parsed = parse_dotenv_line(line)
        if parsed is not None:
            key, value = parsed
            values[key] = value
    return values


def read_dotenv(path: Path) -> Dict[str, str]:
    """Load *path*; a missing file yields no values, an unreadable one raises."""
    if not path.exists():
        return {}
    try:
        content = path.read_text()
    except OSError as exc:
        raise ConfigurationError.unreadable_dotenv(path) from exc
    return parse_dotenv(content.splitlines())
