from dataclasses import dataclass
from enum import Enum


class NotificationKind(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A user-facing message emitted by the batch client."""

    kind: NotificationKind
    title: str
    description: str = ""
