"""Helpers for deriving rates and building MetricRecord objects."""

import math
from datetime import datetime

from lottolotto.core.models import MetricRecord

NANOS_PER_SECOND = 1_000_000_000


def hash_rate(elapsed_ns: int) -> float:
    """Convert a measured iteration duration into a per-second rate.

    Args:
        elapsed_ns: Duration of one iteration in nanoseconds.

    Returns:
        ``1e9 / elapsed_ns``; ``math.inf`` for a zero duration, which a
        coarse clock can report for very fast workloads.

    Raises:
        ValueError: If elapsed_ns is negative.
    """
    if elapsed_ns < 0:
        raise ValueError(f"elapsed_ns must be >= 0, got {elapsed_ns}")
    if elapsed_ns == 0:
        return math.inf
    return NANOS_PER_SECOND / elapsed_ns


def metric_record(
    iteration: int,
    elapsed_ns: int,
    now: datetime | None = None,
) -> MetricRecord:
    """Create a metric record for a completed iteration.

    Args:
        iteration: Zero-based iteration number.
        elapsed_ns: Measured duration of the iteration in nanoseconds.
        now: Timestamp to use (default: current local time).

    Returns:
        MetricRecord with the derived rate.
    """
    return MetricRecord(
        timestamp=now if now is not None else datetime.now(),
        iteration=iteration,
        rate=hash_rate(elapsed_ns),
    )
