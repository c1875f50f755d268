"""Adapters implementing the core ports."""

from lottolotto.adapters.notifications import InMemoryNotifier, LoggingNotifier
from lottolotto.adapters.storage import CsvMetricsSink, InMemoryMetricsSink
from lottolotto.adapters.wakelock import (
    CommandWakeLock,
    TimedWakeLock,
    default_wake_lock,
)

__all__ = [
    "CommandWakeLock",
    "CsvMetricsSink",
    "InMemoryMetricsSink",
    "InMemoryNotifier",
    "LoggingNotifier",
    "TimedWakeLock",
    "default_wake_lock",
]
