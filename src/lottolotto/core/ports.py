"""Port interfaces for the service's external collaborators.

These protocols define the contracts that adapters must implement.
The core depends only on these interfaces, not concrete implementations.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from lottolotto.core.models import (
    MetricRecord,
    Notification,
    NotificationChannel,
    RunSession,
)


@runtime_checkable
class MetricsSinkPort(Protocol):
    """Port for the append-only session metrics log.

    Examples: CsvMetricsSink, InMemoryMetricsSink.
    """

    @property
    def path(self) -> Path | None:
        """Location of the current session log, if any."""
        ...

    def open(self, session: RunSession) -> Path | None:
        """Create the log for a new session and write its header.

        Returns:
            The log location, or None if the log could not be created.
        """
        ...

    def append(self, record: MetricRecord) -> bool:
        """Append one record. Returns True if the record was written."""
        ...

    def close(self) -> None:
        """Release the session log."""
        ...


@runtime_checkable
class NotifierPort(Protocol):
    """Port for the host notification surface.

    Examples: LoggingNotifier, InMemoryNotifier.
    """

    def create_channel(self, channel: NotificationChannel) -> None:
        """Register a notification channel."""
        ...

    def notify(self, notification_id: int, notification: Notification) -> None:
        """Publish or update the notification with the given identifier."""
        ...

    def cancel(self, notification_id: int) -> None:
        """Remove the notification with the given identifier."""
        ...


@runtime_checkable
class WakeLockPort(Protocol):
    """Port for a resource that keeps the device awake.

    Examples: TimedWakeLock, CommandWakeLock.
    """

    @property
    def is_held(self) -> bool:
        """True while the hold is in effect."""
        ...

    def acquire(self, timeout: float) -> None:
        """Take the hold; it expires on its own after ``timeout`` seconds."""
        ...

    def release(self) -> None:
        """Drop the hold if it is still in effect."""
        ...
