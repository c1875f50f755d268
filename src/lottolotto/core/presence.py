"""Presence notification kept visible while a session is running."""

import logging

from lottolotto.core.models import Notification, NotificationChannel
from lottolotto.core.ports import NotifierPort

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_ID = 1


class PresenceNotifier:
    """Publishes a single notification under a fixed identifier.

    Updating is the same as publishing again with the same identifier.
    Backend failures are logged and never raised.
    """

    def __init__(
        self,
        backend: NotifierPort,
        channel: NotificationChannel | None = None,
        notification: Notification | None = None,
        notification_id: int = DEFAULT_NOTIFICATION_ID,
    ) -> None:
        self._backend = backend
        self.channel = channel or NotificationChannel()
        self.notification = notification or Notification(channel_id=self.channel.id)
        self.notification_id = notification_id
        self.refresh_count = 0
        self._channel_created = False

    def ensure_channel(self) -> None:
        """Create the notification channel the first time it is needed."""
        if self._channel_created:
            return
        try:
            self._backend.create_channel(self.channel)
        except Exception:
            logger.exception("Failed to create notification channel %s", self.channel.id)
            return
        self._channel_created = True

    def show(self) -> None:
        """Publish the notification, creating the channel if needed."""
        self.ensure_channel()
        self._publish()

    def refresh(self) -> None:
        """Re-publish the notification to signal liveness."""
        self.refresh_count += 1
        self._publish()

    def dismiss(self) -> None:
        """Remove the notification."""
        try:
            self._backend.cancel(self.notification_id)
        except Exception:
            logger.exception("Failed to cancel notification %d", self.notification_id)

    def _publish(self) -> None:
        try:
            self._backend.notify(self.notification_id, self.notification)
        except Exception:
            logger.exception("Failed to publish notification %d", self.notification_id)
