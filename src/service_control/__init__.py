"""Start, status and stop tooling for singleton named service processes."""

__version__ = "1.0.0"
