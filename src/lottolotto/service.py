"""Experiment service lifecycle controller.

MiningService owns one session at a time: the wake lock, the metrics log,
the presence notification and the worker thread running the WorkLoop.

    INACTIVE -> STARTING -> ACTIVE -> STOPPING -> INACTIVE

The host drives it either through the explicit start()/stop() API or
through the lifecycle callbacks (on_create, on_start_command, on_destroy,
on_bind). Lifecycle methods are expected to be called from a single host
thread. No method raises to its caller; every failure ends in a log line.
"""

import logging
import threading
import time
from collections.abc import Callable, Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from lottolotto.adapters.notifications import LoggingNotifier
from lottolotto.adapters.storage.csv_file import CsvMetricsSink
from lottolotto.adapters.wakelock import default_wake_lock
from lottolotto.config import ServiceConfig
from lottolotto.core.loop import WorkLoop
from lottolotto.core.models import RunSession, ServiceState, StartDirective
from lottolotto.core.ports import MetricsSinkPort, NotifierPort, WakeLockPort
from lottolotto.core.presence import PresenceNotifier
from lottolotto.core.workload import Workload, make_workload

logger = logging.getLogger(__name__)

WORKER_THREAD_NAME = "lottolotto-worker"

# Key of the endpoint parameter in a start intent.
POOL_URL_EXTRA = "pool_url"


class MiningService:
    """Runs the benchmark work loop for one session at a time."""

    def __init__(
        self,
        config: ServiceConfig | None = None,
        *,
        sink: MetricsSinkPort | None = None,
        notifier: NotifierPort | None = None,
        wake_lock: WakeLockPort | None = None,
        workload: Workload | None = None,
        clock: Callable[[], int] | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the service with its collaborators.

        Args:
            config: Service settings (default: ServiceConfig()).
            sink: Metrics log (default: CSV files under config.data_dir).
            notifier: Notification surface (default: LoggingNotifier).
            wake_lock: Wake lock (default: OS inhibitor if available).
            workload: Benchmark callable (default: trigonometric workload).
            clock: Monotonic nanosecond clock for timing iterations.
            now: Wall clock for session and record timestamps.
        """
        self.config = config or ServiceConfig()
        self._sink = sink or CsvMetricsSink(
            self.config.storage_root, self.config.data_dir_name
        )
        self._presence = PresenceNotifier(notifier or LoggingNotifier())
        self._wake_lock = wake_lock or default_wake_lock(self.config.wake_lock_tag)
        self._workload = workload or make_workload(self.config.workload_size)
        self._clock = clock or time.perf_counter_ns
        self._now = now or datetime.now

        self._state = ServiceState.INACTIVE
        self._session: RunSession | None = None
        self._loop: WorkLoop | None = None
        self._thread: threading.Thread | None = None
        # Worker that missed the shutdown deadline and may still be finishing
        # its last iteration.
        self._abandoned: threading.Thread | None = None

    @property
    def state(self) -> ServiceState:
        return self._state

    @property
    def session(self) -> RunSession | None:
        return self._session

    @property
    def presence(self) -> PresenceNotifier:
        return self._presence

    @property
    def log_path(self) -> Path | None:
        return self._sink.path

    @property
    def worker_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # --- Explicit lifecycle API ---

    def start(self, target_endpoint: str | None = None) -> bool:
        """Activate a new session.

        Args:
            target_endpoint: Free-form endpoint parameter. Defaults to
                config.default_endpoint.

        Returns:
            True if a session was started; False if one is already running
            or the worker could not be started.
        """
        if self._state is not ServiceState.INACTIVE:
            logger.warning(
                "Start ignored, service is %s", self._state.value,
                extra={"endpoint": target_endpoint or ""},
            )
            return False
        if not self._reap_abandoned():
            logger.warning("Start ignored, previous worker is still running")
            return False

        endpoint = target_endpoint or self.config.default_endpoint
        self._state = ServiceState.STARTING
        session = RunSession(started_at=self._now(), target_endpoint=endpoint)
        self._session = session

        self._acquire_wake_lock()
        self._open_sink(session)
        self._presence.show()

        loop = WorkLoop(
            sink=self._sink,
            on_refresh=self._presence.refresh,
            workload=self._workload,
            clock=self._clock,
            now=self._now,
            interval=self.config.iteration_interval,
            refresh_every=self.config.refresh_every,
            max_iterations=self.config.max_iterations,
        )
        thread = threading.Thread(
            target=loop.run, args=(session.token,), name=WORKER_THREAD_NAME, daemon=True
        )
        try:
            thread.start()
        except RuntimeError:
            logger.exception("Failed to start worker thread")
            self._teardown()
            return False

        self._loop = loop
        self._thread = thread
        self._state = ServiceState.ACTIVE
        logger.info(
            "Session started",
            extra={"endpoint": endpoint, "log_path": str(self._sink.path or "")},
        )
        return True

    def stop(self) -> None:
        """Deactivate the current session, if any.

        Cancels the worker, waits up to config.shutdown_timeout for it to
        exit, then releases resources in reverse order of acquisition.
        """
        if self._state is not ServiceState.ACTIVE:
            logger.debug("Stop ignored, service is %s", self._state.value)
            return
        self._state = ServiceState.STOPPING
        if self._session is not None:
            self._session.token.cancel()

        thread = self._thread
        if thread is not None:
            thread.join(self.config.shutdown_timeout)
            if thread.is_alive():
                logger.warning(
                    "Worker did not stop within %.1fs, abandoning it",
                    self.config.shutdown_timeout,
                )
                self._abandoned = thread
        self._teardown()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the worker to exit on its own.

        The worker exits by itself when the iteration bound is hit or when
        the workload or sink fails. The session stays ACTIVE, holding its
        wake lock and notification, until stop() is called.

        Returns:
            True if no worker is running when the call returns.
        """
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def stats(self) -> dict[str, Any]:
        """Return a snapshot of the current session for display."""
        loop = self._loop
        last = loop.last_record if loop is not None else None
        return {
            "state": self._state.value,
            "target_endpoint": self._session.target_endpoint if self._session else None,
            "started_at": self._session.started_at.isoformat() if self._session else None,
            "iterations": loop.iterations_completed if loop is not None else 0,
            "worker_alive": self.worker_alive,
            "hash_rate": last.rate if last is not None else 0.0,
            "log_path": str(self._sink.path) if self._sink.path else None,
            "wake_lock_held": self._wake_lock.is_held,
            "notification_refreshes": self._presence.refresh_count,
        }

    # --- Host lifecycle callbacks ---

    def on_create(self) -> None:
        """Host created the service."""
        self._presence.ensure_channel()
        logger.info("Service created")

    def on_start_command(
        self, intent: Mapping[str, str] | None = None
    ) -> StartDirective:
        """Host asked the service to start.

        Args:
            intent: Start parameters; ``pool_url`` selects the endpoint.

        Returns:
            StartDirective.STICKY: restart with the last intent if killed.
        """
        endpoint = intent.get(POOL_URL_EXTRA) if intent is not None else None
        self.start(endpoint)
        return StartDirective.STICKY

    def on_destroy(self) -> None:
        """Host is destroying the service."""
        self.stop()
        logger.info("Service destroyed")

    def on_bind(self, intent: Mapping[str, str] | None = None) -> None:
        """Binding is not supported."""
        return None

    # --- Internals ---

    def _acquire_wake_lock(self) -> None:
        try:
            self._wake_lock.acquire(self.config.wake_lock_timeout)
        except Exception:
            logger.exception("Failed to acquire wake lock")

    def _release_wake_lock(self) -> None:
        try:
            if self._wake_lock.is_held:
                self._wake_lock.release()
        except Exception:
            logger.exception("Failed to release wake lock")

    def _open_sink(self, session: RunSession) -> None:
        try:
            path = self._sink.open(session)
        except Exception:
            logger.exception("Failed to open metrics log")
            return
        if path is None:
            logger.warning("Metrics logging disabled for this session")

    def _close_sink(self) -> None:
        try:
            self._sink.close()
        except Exception:
            logger.exception("Failed to close metrics log")

    def _reap_abandoned(self) -> bool:
        abandoned = self._abandoned
        if abandoned is None:
            return True
        abandoned.join(self.config.shutdown_timeout)
        if abandoned.is_alive():
            return False
        self._abandoned = None
        return True

    def _teardown(self) -> None:
        iterations = self._loop.iterations_completed if self._loop is not None else 0
        if self._session is not None:
            self._session.token.cancel()
        self._presence.dismiss()
        self._close_sink()
        self._release_wake_lock()
        self._thread = None
        self._session = None
        self._state = ServiceState.INACTIVE
        logger.info("Session stopped", extra={"iterations": iterations})
