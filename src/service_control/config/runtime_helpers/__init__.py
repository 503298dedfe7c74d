"""Helper modules for runtime configuration."""

from .dotenv_loader import parse_dotenv, parse_dotenv_line, read_dotenv

__all__ = [
    "parse_dotenv",
    "parse_dotenv_line",
    "read_dotenv",
]
