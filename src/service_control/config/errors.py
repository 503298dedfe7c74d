from __future__ import annotations

"""Exception types for configuration handling."""


class ConfigurationError(RuntimeError):
    """Raised when a SERVICE_CONTROL_* setting or a dotenv file is unusable."""

    @classmethod
    def missing_variable(cls, name: str) -> "ConfigurationError":
        return cls(f"Required environment variable {name!r} is not set")

    @classmethod
    def not_a_number(cls, name: str, raw: str, kind: str) -> "ConfigurationError":
        return cls(f"Environment variable {name!r} must be {kind} (got {raw!r})")

    @classmethod
    def not_a_boolean(cls, name: str, raw: str, allowed) -> "ConfigurationError":
        return cls(f"Environment variable {name!r} must be a boolean (allowed: {sorted(allowed)}, got {raw!r})")

    @classmethod
    def negative_duration(cls, name: str, value: float) -> "ConfigurationError":
        return cls(f"Environment variable {name!r} must be non-negative (got {value:g})")

    @classmethod
    def invalid_value(cls, name: str, value, reason: str = "") -> "ConfigurationError":
        msg = f"Invalid value for {name}: {value!r}"
        if reason:
            msg += f". {reason}"
        return cls(msg)

    @classmethod
    def unreadable_dotenv(cls, path) -> "ConfigurationError":
        return cls(f"Failed to read settings file {path}")


__all__ = ["ConfigurationError"]
