from rxsync.logging.logger import Log
from rxsync.notifications.base import BaseNotifier
from rxsync.notifications.models import Notification, NotificationKind


class LogNotifier(BaseNotifier):
    """Writes notifications to the log and keeps them in emission order."""

    def __init__(self) -> None:
        self.history: list[Notification] = []

    def publish(self, notification: Notification) -> None:
        self.history.append(notification)
        message = f"{notification.title}: {notification.description}"
        if notification.kind is NotificationKind.ERROR:
            Log.error(message)
        else:
            Log.info(message)
