from __future__ import annotations

import pytest

from service_control.errors import DiscoveryError, UsageError, ValidationError
from service_control.target_resolver import ProcessHandle, TargetSource, resolve_target


def test_explicit_pid_wins_over_pattern(process_table):
    process_table.add(20, "java -jar app.jar")

    handle = resolve_target("55", "app.jar", process_table)

    assert handle == ProcessHandle(pid=55, source=TargetSource.EXPLICIT)
    assert process_table.find_calls == []


def test_explicit_pid_wins_even_when_pattern_matches_nothing(process_table):
    assert resolve_target("55", "missing.jar", process_table).pid == 55


def test_pattern_resolves_to_lowest_match(process_table):
    process_table.add(90, "java -jar app.jar")
    process_table.add(12, "java -jar app.jar --debug")

    handle = resolve_target(None, "app.jar", process_table)

    assert handle == ProcessHandle(pid=12, source=TargetSource.PATTERN, pattern="app.jar")


def test_pattern_without_match(process_table):
    with pytest.raises(DiscoveryError, match="No running process found for jar file 'app.jar'."):
        resolve_target(None, "app.jar", process_table)


def test_invalid_pid(process_table):
    with pytest.raises(ValidationError):
        resolve_target("12x", None, process_table)


@pytest.mark.parametrize("pid, pattern", [(None, None), ("", ""), (None, "")])
def test_neither_target_given(process_table, pid, pattern):
    with pytest.raises(UsageError, match="You must provide either a PID or a jar file name."):
        resolve_target(pid, pattern, process_table)
