"""Shared test fixtures for all test modules."""

import itertools
import time
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

import pytest

from lottolotto.adapters.notifications import InMemoryNotifier
from lottolotto.adapters.wakelock import TimedWakeLock
from lottolotto.config import ServiceConfig
from lottolotto.service import MiningService

FIXED_NOW = datetime(2026, 10, 19, 9, 30, 0)


def _wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture
def wait_for() -> Callable[..., bool]:
    """Return a helper that polls a predicate until it is true or times out."""
    return _wait_for


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """Provide a temporary application storage scope."""
    return tmp_path / "storage"


@pytest.fixture
def step_clock() -> Callable[[int], Callable[[], int]]:
    """Factory for nanosecond clocks that advance by a fixed step per read.

    The work loop reads the clock twice per iteration, so every iteration
    measures exactly ``step_ns``.
    """

    def _make(step_ns: int = 1_000_000) -> Callable[[], int]:
        ticks = itertools.count(0, step_ns)
        return lambda: next(ticks)

    return _make


@pytest.fixture
def fixed_now() -> Callable[[], datetime]:
    """Wall clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def notifier() -> InMemoryNotifier:
    return InMemoryNotifier()


@pytest.fixture
def wake_lock() -> Iterator[TimedWakeLock]:
    lock = TimedWakeLock("test::wakelock")
    yield lock
    lock.release()


@pytest.fixture
def make_service(
    storage_root: Path,
    notifier: InMemoryNotifier,
    wake_lock: TimedWakeLock,
    step_clock: Callable[[int], Callable[[], int]],
):
    """Factory fixture for services wired to in-memory collaborators.

    Services created through it are stopped at teardown.
    """
    created: list[MiningService] = []

    def _make(**overrides) -> MiningService:
        config_overrides = {
            "storage_root": storage_root,
            "iteration_interval": 0.0,
            "workload_size": 10,
            **overrides.pop("config", {}),
        }
        kwargs = {
            "notifier": notifier,
            "wake_lock": wake_lock,
            "clock": step_clock(1_000_000),
            **overrides,
        }
        service = MiningService(ServiceConfig(**config_overrides), **kwargs)
        created.append(service)
        return service

    yield _make
    for service in created:
        service.stop()
