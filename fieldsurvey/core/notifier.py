"""Notification sinks - injected outlets for user-facing status events.

Components receive a NotificationSink instead of dispatching through a global
event bus. Delivery is fire-and-forget: deliver() logs and drops any sink
failure so a broken UI bridge can never break a measurement.
"""

import logging
from typing import Protocol, runtime_checkable

from fieldsurvey.model.notification import Notification, NotificationType

logger = logging.getLogger(__name__)


@runtime_checkable
class NotificationSink(Protocol):
    """Anything that can show a notification to the user."""

    def notify(self, notification: Notification) -> None:
        """Display or forward a notification."""


def deliver(sink: NotificationSink | None, notification: Notification) -> None:
    """Hand a notification to a sink without letting sink errors propagate.

    Args:
        sink: Target sink, or None to skip delivery
        notification: Event to deliver
    """
    if sink is None:
        return
    try:
        sink.notify(notification)
    except Exception:
        logger.exception(f"Notification sink {type(sink).__name__} failed for '{notification.title}'")


class LoggingNotificationSink:
    """Sink that writes notifications to the log (default for headless use)."""

    _LEVELS = {
        NotificationType.INFO: logging.INFO,
        NotificationType.SUCCESS: logging.INFO,
        NotificationType.WARNING: logging.WARNING,
        NotificationType.ERROR: logging.ERROR,
    }

    def __init__(self, name: str = "fieldsurvey.notifications") -> None:
        self._logger = logging.getLogger(name)

    def notify(self, notification: Notification) -> None:
        self._logger.log(self._LEVELS[notification.type], f"[NOTIFY] {notification}")


class RecordingNotificationSink:
    """Sink that keeps every notification in memory, newest last."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def of_type(self, cls: type[Notification]) -> list[Notification]:
        """All recorded notifications of a given class."""
        return [n for n in self.notifications if isinstance(n, cls)]

    def clear(self) -> None:
        self.notifications = []
