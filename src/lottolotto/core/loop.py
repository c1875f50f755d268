"""The benchmark work loop run on the service's worker thread."""

import logging
import time
from collections.abc import Callable
from datetime import datetime

from lottolotto.core.cancellation import CancellationToken
from lottolotto.core.metrics import metric_record
from lottolotto.core.models import MetricRecord
from lottolotto.core.ports import MetricsSinkPort
from lottolotto.core.workload import Workload, make_workload

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.1
DEFAULT_REFRESH_EVERY = 50


class WorkLoop:
    """Times a workload repeatedly and appends one record per iteration.

    Each iteration reads the monotonic clock, runs the workload, reads the
    clock again, appends the derived record to the sink and, on every
    ``refresh_every``-th iteration starting at 0, calls ``on_refresh``.
    """

    def __init__(
        self,
        sink: MetricsSinkPort,
        on_refresh: Callable[[], None] | None = None,
        workload: Workload | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
        now: Callable[[], datetime] = datetime.now,
        interval: float = DEFAULT_INTERVAL,
        refresh_every: int = DEFAULT_REFRESH_EVERY,
        max_iterations: int | None = None,
    ) -> None:
        """Initialize the loop.

        Args:
            sink: Where records are appended.
            on_refresh: Called on iterations 0, refresh_every, 2 * refresh_every...
            workload: Benchmark callable (default: trigonometric workload).
            clock: Monotonic clock returning nanoseconds.
            now: Wall clock used to timestamp records.
            interval: Seconds to sleep between iterations.
            refresh_every: Refresh cadence in iterations.
            max_iterations: Stop after this many iterations (default: unbounded).
        """
        if refresh_every < 1:
            raise ValueError(f"refresh_every must be >= 1, got {refresh_every}")
        self._sink = sink
        self._on_refresh = on_refresh
        self._workload = workload or make_workload()
        self._clock = clock
        self._now = now
        self._interval = interval
        self._refresh_every = refresh_every
        self._max_iterations = max_iterations
        self.iterations_completed = 0
        self.last_record: MetricRecord | None = None

    def step(
        self, iteration: int, token: CancellationToken | None = None
    ) -> MetricRecord | None:
        """Run and record a single iteration.

        If ``token`` is cancelled while the workload runs, the measurement is
        discarded: nothing is appended and no refresh is issued.
        """
        start = self._clock()
        self._workload()
        end = self._clock()
        if token is not None and token.cancelled:
            return None
        record = metric_record(iteration, end - start, now=self._now())
        self._sink.append(record)
        if iteration % self._refresh_every == 0 and self._on_refresh is not None:
            if token is None or not token.cancelled:
                self._on_refresh()
        self.iterations_completed = iteration + 1
        self.last_record = record
        return record

    def run(self, token: CancellationToken) -> None:
        """Iterate until the token is cancelled or the iteration bound is hit.

        An exception from the workload or the sink is logged and ends the
        loop. The owner still holds its session resources at that point and
        must call its own stop to release them.
        """
        iteration = 0
        try:
            while not token.cancelled:
                if self._max_iterations is not None and iteration >= self._max_iterations:
                    logger.info("Iteration limit reached", extra={"iterations": iteration})
                    return
                self.step(iteration, token)
                iteration += 1
                if token.wait(self._interval):
                    logger.debug("Work loop interrupted", extra={"iterations": iteration})
                    return
        except Exception:
            logger.exception("Work loop failed", extra={"iteration": iteration})
