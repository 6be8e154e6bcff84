from rxsync.notifications.base import BaseNotifier
from rxsync.notifications.log_notifier import LogNotifier
from rxsync.notifications.models import Notification, NotificationKind

__all__ = ["BaseNotifier", "LogNotifier", "Notification", "NotificationKind"]
