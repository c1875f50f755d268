"""Core domain models for experiment sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from lottolotto.core.cancellation import CancellationToken


class ServiceState(Enum):
    """Lifecycle states of the experiment service."""

    INACTIVE = "inactive"
    STARTING = "starting"
    ACTIVE = "active"
    STOPPING = "stopping"


class StartDirective(Enum):
    """What the host should do if it kills the service after a start command."""

    STICKY = "sticky"  # restart with the last intent
    NOT_STICKY = "not_sticky"


class Importance(Enum):
    """Notification channel importance."""

    LOW = "low"
    DEFAULT = "default"
    HIGH = "high"


@dataclass(frozen=True)
class MetricRecord:
    """A single row of the session metrics log.

    Attributes:
        timestamp: Wall-clock time the iteration finished.
        iteration: Zero-based iteration counter, strictly increasing.
        rate: Iterations per second derived from the measured duration.
    """

    timestamp: datetime
    iteration: int
    rate: float


@dataclass(frozen=True)
class RunSession:
    """One activate-to-deactivate lifetime of the service.

    Attributes:
        started_at: Wall-clock time the session was activated.
        target_endpoint: Free-form endpoint parameter supplied by the host.
        token: Cancellation token shared with the worker.
    """

    started_at: datetime
    target_endpoint: str
    token: CancellationToken = field(default_factory=CancellationToken)

    @property
    def is_active(self) -> bool:
        return not self.token.cancelled


@dataclass(frozen=True)
class NotificationChannel:
    """A notification channel the presence notification is posted to."""

    id: str = "MiningChannel"
    name: str = "Mining Service"
    description: str = "Channel for service notifications"
    importance: Importance = Importance.LOW


@dataclass(frozen=True)
class Notification:
    """Content of the persistent presence notification."""

    title: str = "lottolotto"
    text: str = "Experiment running..."
    channel_id: str = "MiningChannel"
    importance: Importance = Importance.LOW
