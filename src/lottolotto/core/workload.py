"""Benchmark workloads executed once per iteration."""

import functools
import math
from collections.abc import Callable

# Any zero-argument callable that burns a fixed amount of CPU time.
Workload = Callable[[], object]

DEFAULT_WORKLOAD_SIZE = 10_000


def trigonometric_workload(size: int = DEFAULT_WORKLOAD_SIZE) -> float:
    """Run a fixed number of trigonometric evaluations.

    The result carries no meaning; only the time spent computing it does.

    Args:
        size: Number of terms to accumulate.

    Returns:
        The accumulated sum.
    """
    result = 0.0
    for i in range(size):
        result += math.sin(i) * math.cos(i) * math.tan(i % 90)
    return result


def make_workload(size: int = DEFAULT_WORKLOAD_SIZE) -> Workload:
    """Bind a workload size, returning a zero-argument callable."""
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    return functools.partial(trigonometric_workload, size)
