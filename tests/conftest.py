"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import uuid

import pytest

from service_control.config import runtime
from service_control.config.settings import get_supervisor_settings
from tests.helpers.process_table import FakeProcessTable, RecordingSleep


@pytest.fixture(autouse=True)
def isolated_configuration(monkeypatch):
    """Keep developer .env files and SERVICE_CONTROL_* variables out of tests."""
    for name in list(os.environ):
        if name.startswith("SERVICE_CONTROL_") or name.startswith("JAVA_HOME_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(runtime, "_DEFAULT_VALUES", {})
    get_supervisor_settings.cache_clear()
    yield
    get_supervisor_settings.cache_clear()


@pytest.fixture
def process_table() -> FakeProcessTable:
    return FakeProcessTable()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def messages() -> list:
    return []


@pytest.fixture
def marker() -> str:
    return f"service-control-test-{uuid.uuid4().hex}"


@pytest.fixture
def jar_file(tmp_path):
    jar = tmp_path / "demo-app.jar"
    jar.write_bytes(b"PK\x03\x04")
    return jar
