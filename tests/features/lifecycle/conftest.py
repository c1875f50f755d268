"""BDD step definitions for the session lifecycle feature."""

import itertools
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, then, when

from lottolotto.adapters.notifications import InMemoryNotifier
from lottolotto.adapters.wakelock import TimedWakeLock
from lottolotto.config import ServiceConfig
from lottolotto.core.models import ServiceState
from lottolotto.service import MiningService


@dataclass
class SessionScenarioContext:
    """Shared state between steps in a session scenario."""

    storage_root: Path | None = None
    step_ns: int = 1_000_000
    max_iterations: int | None = None
    wall_clock: datetime = datetime(2026, 10, 19, 9, 30, 0)
    notifier: InMemoryNotifier = field(default_factory=InMemoryNotifier)
    wake_lock: TimedWakeLock = field(default_factory=lambda: TimedWakeLock("bdd"))
    service: MiningService | None = None
    endpoint: str | None = None
    log_paths: list[Path] = field(default_factory=list)

    def build_service(self) -> MiningService:
        assert self.storage_root is not None
        ticks = itertools.count(0, self.step_ns)
        config = ServiceConfig(
            storage_root=self.storage_root,
            iteration_interval=0.0,
            workload_size=10,
            max_iterations=self.max_iterations,
        )
        return MiningService(
            config,
            notifier=self.notifier,
            wake_lock=self.wake_lock,
            clock=lambda: next(ticks),
            now=lambda: self.wall_clock,
        )


@pytest.fixture
def ctx():
    """Fresh scenario context for each test."""
    context = SessionScenarioContext()
    yield context
    if context.service is not None:
        context.service.stop()
    context.wake_lock.release()


# === Background Steps ===
@given("a temporary storage root")
def step_storage_root(ctx: SessionScenarioContext, tmp_path: Path) -> None:
    ctx.storage_root = tmp_path / "storage"


@given(parsers.parse("simulated iterations of {ns:d} ns"))
def step_simulated_iterations(ctx: SessionScenarioContext, ns: int) -> None:
    ctx.step_ns = ns


@given(parsers.parse("the service is limited to {n:d} iterations"))
def step_iteration_limit(ctx: SessionScenarioContext, n: int) -> None:
    ctx.max_iterations = n
    ctx.service = ctx.build_service()
    ctx.service.on_create()


# === Lifecycle Steps ===
@when(parsers.parse('the host starts the service with pool_url "{endpoint}"'))
def step_start_with_endpoint(ctx: SessionScenarioContext, endpoint: str) -> None:
    assert ctx.service is not None
    ctx.service.on_start_command({"pool_url": endpoint})
    if ctx.service.log_path is not None:
        ctx.log_paths.append(ctx.service.log_path)


@when("the host starts the service without an intent")
def step_start_without_intent(ctx: SessionScenarioContext) -> None:
    assert ctx.service is not None
    ctx.service.on_start_command(None)


@when("the worker finishes")
def step_worker_finishes(ctx: SessionScenarioContext) -> None:
    assert ctx.service is not None
    assert ctx.service.wait(10.0)


@when("the host destroys the service")
def step_destroy(ctx: SessionScenarioContext) -> None:
    assert ctx.service is not None
    ctx.service.on_destroy()


@when("one second passes")
def step_one_second_passes(ctx: SessionScenarioContext) -> None:
    ctx.wall_clock += timedelta(seconds=1)


# === Assertions ===
def _lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


@then(parsers.parse("the metrics log has {n:d} lines"))
def then_log_lines(ctx: SessionScenarioContext, n: int) -> None:
    assert len(_lines(ctx.log_paths[-1])) == n


@then(parsers.parse('the last data row has rate "{rate}"'))
def then_last_rate(ctx: SessionScenarioContext, rate: str) -> None:
    assert _lines(ctx.log_paths[-1])[-1].split(",")[2] == rate


@then(parsers.parse("the presence notification was refreshed {n:d} times"))
def then_refresh_count(ctx: SessionScenarioContext, n: int) -> None:
    assert ctx.service is not None
    assert ctx.service.presence.refresh_count == n


@then(parsers.parse('the session endpoint is "{endpoint}"'))
def then_session_endpoint(ctx: SessionScenarioContext, endpoint: str) -> None:
    assert ctx.service is not None
    assert ctx.service.stats()["target_endpoint"] == endpoint


@then("the service is inactive")
def then_inactive(ctx: SessionScenarioContext) -> None:
    assert ctx.service is not None
    assert ctx.service.state is ServiceState.INACTIVE
    assert not ctx.service.worker_alive


@then("the wake lock is released")
def then_wake_lock_released(ctx: SessionScenarioContext) -> None:
    assert not ctx.wake_lock.is_held


@then("no presence notification is shown")
def then_no_notification(ctx: SessionScenarioContext) -> None:
    assert ctx.notifier.active == {}


@then(parsers.parse("there are {n:d} metrics log files"))
def then_log_file_count(ctx: SessionScenarioContext, n: int) -> None:
    assert ctx.storage_root is not None
    files = sorted((ctx.storage_root / "experiment_data").glob("mining_data_*.csv"))
    assert len(files) == n
    assert files == sorted(ctx.log_paths)


@then(parsers.parse("the first metrics log file has {n:d} lines"))
def then_first_log_lines(ctx: SessionScenarioContext, n: int) -> None:
    assert len(_lines(ctx.log_paths[0])) == n


@then("the second metrics log file sorts after the first")
def then_second_sorts_after(ctx: SessionScenarioContext) -> None:
    first, second = ctx.log_paths
    assert second.name > first.name
