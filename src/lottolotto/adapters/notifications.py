"""Notification adapters implementing NotifierPort."""

import logging
from dataclasses import dataclass

from lottolotto.core.models import Notification, NotificationChannel

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """NotifierPort that reports notifications as log lines.

    Used by hosts without a notification surface, such as a terminal.
    """

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    def create_channel(self, channel: NotificationChannel) -> None:
        logger.debug(
            "Notification channel created",
            extra={"channel": channel.id, "importance": channel.importance.value},
        )

    def notify(self, notification_id: int, notification: Notification) -> None:
        logger.log(
            self._level,
            "%s: %s",
            notification.title,
            notification.text,
            extra={"notification_id": notification_id},
        )

    def cancel(self, notification_id: int) -> None:
        logger.debug("Notification cancelled", extra={"notification_id": notification_id})


@dataclass(frozen=True)
class PublishedNotification:
    """A notify() call captured by InMemoryNotifier."""

    notification_id: int
    notification: Notification


class InMemoryNotifier:
    """NotifierPort that records every call.

    ``published`` keeps every notify() call in order; ``active`` maps the
    identifiers currently shown to their latest content.
    """

    def __init__(self) -> None:
        self.channels: dict[str, NotificationChannel] = {}
        self.published: list[PublishedNotification] = []
        self.active: dict[int, Notification] = {}
        self.channel_create_calls = 0

    def create_channel(self, channel: NotificationChannel) -> None:
        self.channel_create_calls += 1
        self.channels[channel.id] = channel

    def notify(self, notification_id: int, notification: Notification) -> None:
        self.published.append(PublishedNotification(notification_id, notification))
        self.active[notification_id] = notification

    def cancel(self, notification_id: int) -> None:
        self.active.pop(notification_id, None)
