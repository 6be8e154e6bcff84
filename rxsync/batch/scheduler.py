import threading
from abc import ABC, abstractmethod
from collections.abc import Callable


class ScheduledTask(ABC):
    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running if it has not fired yet."""


class BaseScheduler(ABC):
    """Contract for running callbacks after a wall-clock delay."""

    @abstractmethod
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run ``callback`` once, ``delay_seconds`` from now."""


class _TimerTask(ScheduledTask):
    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingScheduler(BaseScheduler):
    """Fires callbacks on daemon timer threads."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(delay_seconds, callback)
        timer.daemon = True
        timer.start()
        return _TimerTask(timer)
