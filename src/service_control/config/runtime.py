from __future__ import annotations

"""Environment-backed configuration lookups with dotenv fallbacks.

Lookup order for every setting: the process environment, then ``./.env``,
then ``~/.service_control.env``, then the caller's ``or_value``. The dotenv
files are read once per process.
"""


import os
from pathlib import Path
from typing import Callable, Optional, TypeVar

from .errors import ConfigurationError
from .runtime_helpers import read_dotenv

_T = TypeVar("_T")

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}

_DOTENV_CANDIDATES = (Path(".env"), Path.home() / ".service_control.env")

_DEFAULT_VALUES: dict[str, str] | None = None


def _load_default_values() -> dict[str, str]:
    global _DEFAULT_VALUES
    if _DEFAULT_VALUES is not None:
        return _DEFAULT_VALUES

    defaults: dict[str, str] = {}
    for path in _DOTENV_CANDIDATES:
        for key, value in read_dotenv(path).items():
            defaults.setdefault(key, value)

    _DEFAULT_VALUES = defaults
    return defaults


def _lookup(name: str, *, strip: bool, allow_blank: bool) -> Optional[str]:
    for raw in (os.getenv(name), _load_default_values().get(name)):
        if raw is None:
            continue
        value = raw.strip() if strip else raw
        if value or allow_blank:
            return value
    return None


def env_str(
    name: str,
    or_value: str | None = None,
    *,
    required: bool = False,
    strip: bool = True,
    allow_blank: bool = False,
) -> str | None:
    """Fetch a setting as a string; blank values fall through unless *allow_blank*."""

    value = _lookup(name, strip=strip, allow_blank=allow_blank)
    if value is None:
        if required:
            raise ConfigurationError.missing_variable(name)
        return or_value
    return value


def _env_converted(
    name: str,
    or_value: Optional[_T],
    required: bool,
    convert: Callable[[str], _T],
    kind: str,
) -> Optional[_T]:
    raw = env_str(name)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError.missing_variable(name)
        return or_value
    try:
        return convert(raw)
    except ValueError as exc:
        raise ConfigurationError.not_a_number(name, raw, kind) from exc


def env_int(name: str, or_value: int | None = None, *, required: bool = False) -> int | None:
    return _env_converted(name, or_value, required, int, "an integer")


def env_float(name: str, or_value: float | None = None, *, required: bool = False) -> float | None:
    return _env_converted(name, or_value, required, float, "a number")


def env_bool(name: str, or_value: bool | None = None, *, required: bool = False) -> bool | None:
    raw = env_str(name)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError.missing_variable(name)
        return or_value

    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError.not_a_boolean(name, raw, _TRUE_VALUES | _FALSE_VALUES)


def env_seconds(name: str, or_value: float | None = None, *, required: bool = False) -> float | None:
    """Fetch a duration in (possibly fractional) seconds; negative values are rejected."""

    value = env_float(name, or_value=or_value, required=required)
    if value is None:
        return None
    if value < 0:
        raise ConfigurationError.negative_duration(name, value)
    return value


__all__ = [
    "ConfigurationError",
    "env_bool",
    "env_float",
    "env_int",
    "env_seconds",
    "env_str",
]
