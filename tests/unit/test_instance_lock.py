from __future__ import annotations

import os

import pytest

from service_control.errors import LaunchLockError
from service_control.instance_lock import LaunchLock, launch_guard
from tests.helpers.process_table import posix_only

pytestmark = posix_only


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_guard_creates_lock_file_with_owner_pid(tmp_path):
    with launch_guard("orders", tmp_path / "locks", timeout=1.0) as lock:
        assert lock.held
        assert lock.lock_path == tmp_path / "locks" / "orders.lock"
        assert lock.lock_path.read_text() == str(os.getpid())

    assert not lock.held
    assert lock.lock_path.exists()


def test_second_holder_times_out_while_first_holds(tmp_path):
    clock = FakeClock()
    sleeps = []

    def fake_sleep(seconds):
        sleeps.append(seconds)
        clock.advance(seconds)

    first = LaunchLock("orders", tmp_path, timeout=1.0)
    first.acquire()
    try:
        second = LaunchLock("orders", tmp_path, timeout=0.2, sleep=fake_sleep, clock=clock)
        with pytest.raises(LaunchLockError, match="orders"):
            second.acquire()
        assert not second.held
        assert sleeps
        assert clock.now >= 0.2
    finally:
        first.release()


def test_lock_is_reacquirable_after_release(tmp_path):
    first = LaunchLock("orders", tmp_path, timeout=0.5)
    first.acquire()
    first.release()

    second = LaunchLock("orders", tmp_path, timeout=0.5)
    second.acquire()
    assert second.held
    second.release()


def test_distinct_service_names_do_not_contend(tmp_path):
    with launch_guard("orders", tmp_path, timeout=0.1):
        with launch_guard("billing", tmp_path, timeout=0.1) as other:
            assert other.held


def test_release_without_acquire_is_noop(tmp_path):
    LaunchLock("orders", tmp_path, timeout=0.1).release()


def test_guard_releases_when_body_raises(tmp_path):
    with pytest.raises(RuntimeError):
        with launch_guard("orders", tmp_path, timeout=0.1):
            raise RuntimeError("boom")

    with launch_guard("orders", tmp_path, timeout=0.1) as lock:
        assert lock.held


def test_lock_directory_that_cannot_be_created(tmp_path):
    blocker = tmp_path / "plain-file"
    blocker.write_text("")

    with pytest.raises(LaunchLockError, match="Cannot open launch lock"):
        LaunchLock("orders", blocker / "locks", timeout=0.1).acquire()
