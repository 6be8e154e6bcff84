from abc import ABC, abstractmethod

from rxsync.notifications.models import Notification, NotificationKind


class BaseNotifier(ABC):
    """Contract for anything that surfaces notifications to the user."""

    @abstractmethod
    def publish(self, notification: Notification) -> None:
        """Deliver a single notification."""

    def notify(self, kind: NotificationKind, title: str, description: str = "") -> None:
        self.publish(Notification(kind=kind, title=title, description=description))
