import random
import threading

from rxsync.batch.models import STAGE_MESSAGES, ProcessingStage
from rxsync.batch.scheduler import BaseScheduler, ScheduledTask
from rxsync.config.settings import Settings
from rxsync.logging.logger import Log

_START_PROGRESS = 10.0
_SIMULATED_CEILING = 90.0
_MAX_TICK_STEP = 10.0


class PhaseTicker:
    """Cosmetic batch-wide phase signal driven by a fixed schedule.

    The ticker is uncorrelated with per-record status: it walks
    uploading -> ocr -> reasoning -> validating on wall-clock delays and nudges
    a simulated progress value up to 90 until ``stop`` is called. Nothing in
    the real pipeline waits on it.
    """

    def __init__(
        self,
        scheduler: BaseScheduler,
        settings: Settings,
        rng: random.Random | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._settings = settings
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        self._tasks: list[ScheduledTask] = []
        self._tick_task: ScheduledTask | None = None
        self._running = False
        self._stage = ProcessingStage.IDLE
        self._progress = 0.0

    @property
    def stage(self) -> ProcessingStage:
        return self._stage

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def message(self) -> str:
        return STAGE_MESSAGES[self._stage]

    def start(self) -> None:
        with self._lock:
            self._cancel_tasks()
            self._running = True
            self._stage = ProcessingStage.UPLOADING
            self._progress = _START_PROGRESS
            schedule = (
                (self._settings.phase_ocr_after_seconds, ProcessingStage.OCR),
                (self._settings.phase_reasoning_after_seconds, ProcessingStage.REASONING),
                (self._settings.phase_validating_after_seconds, ProcessingStage.VALIDATING),
            )
            for delay, stage in schedule:
                self._tasks.append(
                    self._scheduler.schedule(delay, lambda s=stage: self._advance(s))
                )
            self._schedule_tick()
        Log.debug(f"Phase ticker started: {self.message}")

    def stop(self) -> None:
        """Cancel pending timers and settle on the complete phase."""
        with self._lock:
            self._running = False
            self._cancel_tasks()
            self._stage = ProcessingStage.COMPLETE
            self._progress = 100.0

    def _advance(self, stage: ProcessingStage) -> None:
        with self._lock:
            if not self._running:
                return
            self._stage = stage
        Log.debug(f"Phase: {STAGE_MESSAGES[stage]}")

    def _tick(self) -> None:
        with self._lock:
            if not self._running:
                return
            step = self._rng.uniform(0.0, _MAX_TICK_STEP)
            self._progress = min(_SIMULATED_CEILING, self._progress + step)
            self._schedule_tick()

    def _schedule_tick(self) -> None:
        self._tick_task = self._scheduler.schedule(
            self._settings.progress_tick_seconds, self._tick
        )

    def _cancel_tasks(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None
