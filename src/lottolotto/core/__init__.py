"""Core domain: models, ports and the work loop."""

from lottolotto.core.cancellation import CancellationToken
from lottolotto.core.loop import WorkLoop
from lottolotto.core.metrics import hash_rate, metric_record
from lottolotto.core.models import (
    Importance,
    MetricRecord,
    Notification,
    NotificationChannel,
    RunSession,
    ServiceState,
    StartDirective,
)
from lottolotto.core.presence import PresenceNotifier

__all__ = [
    "CancellationToken",
    "Importance",
    "MetricRecord",
    "Notification",
    "NotificationChannel",
    "PresenceNotifier",
    "RunSession",
    "ServiceState",
    "StartDirective",
    "WorkLoop",
    "hash_rate",
    "metric_record",
]
