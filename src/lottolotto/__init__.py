"""lottolotto: a CPU benchmark service that logs per-iteration rates to CSV."""

from lottolotto.adapters.logging import KeyValueFormatter, get_logger, setup_logging
from lottolotto.adapters.notifications import InMemoryNotifier, LoggingNotifier
from lottolotto.adapters.storage import CsvMetricsSink, InMemoryMetricsSink
from lottolotto.adapters.wakelock import (
    CommandWakeLock,
    TimedWakeLock,
    default_wake_lock,
)
from lottolotto.config import ServiceConfig
from lottolotto.core.cancellation import CancellationToken
from lottolotto.core.loop import WorkLoop
from lottolotto.core.metrics import hash_rate, metric_record
from lottolotto.core.models import (
    MetricRecord,
    Notification,
    NotificationChannel,
    RunSession,
    ServiceState,
    StartDirective,
)
from lottolotto.core.ports import MetricsSinkPort, NotifierPort, WakeLockPort
from lottolotto.core.presence import PresenceNotifier
from lottolotto.core.workload import make_workload, trigonometric_workload
from lottolotto.service import MiningService

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "CommandWakeLock",
    "CsvMetricsSink",
    "InMemoryMetricsSink",
    "InMemoryNotifier",
    "KeyValueFormatter",
    "LoggingNotifier",
    "MetricRecord",
    "MetricsSinkPort",
    "MiningService",
    "Notification",
    "NotificationChannel",
    "NotifierPort",
    "PresenceNotifier",
    "RunSession",
    "ServiceConfig",
    "ServiceState",
    "StartDirective",
    "TimedWakeLock",
    "WakeLockPort",
    "WorkLoop",
    "default_wake_lock",
    "get_logger",
    "hash_rate",
    "make_workload",
    "metric_record",
    "setup_logging",
    "trigonometric_workload",
]
