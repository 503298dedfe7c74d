"""Fixtures shared by the command-line tests."""

from __future__ import annotations

import pytest

from service_control.cli import common


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Commands must not replace pytest's log capture handlers."""
    calls = []
    monkeypatch.setattr(common, "setup_logging", lambda *args, **kwargs: calls.append((args, kwargs)))
    return calls


@pytest.fixture
def pid_dir(monkeypatch, tmp_path):
    directory = tmp_path / "pids"
    monkeypatch.setenv("SERVICE_CONTROL_PID_DIR", str(directory))
    return directory


@pytest.fixture
def fast_timings(monkeypatch):
    monkeypatch.setenv("SERVICE_CONTROL_SETTLE_SECONDS", "0")
    monkeypatch.setenv("SERVICE_CONTROL_GRACE_SECONDS", "1")
    monkeypatch.setenv("SERVICE_CONTROL_KILL_SETTLE_SECONDS", "1")
    monkeypatch.setenv("SERVICE_CONTROL_POLL_SECONDS", "0.05")
