import random

from rxsync.batch.models import STAGE_MESSAGES, ProcessingStage
from rxsync.batch.phase import PhaseTicker
from rxsync.config.settings import Settings
from tests.conftest import ManualScheduler


def _make_ticker(scheduler: ManualScheduler) -> PhaseTicker:
    settings = Settings(
        phase_ocr_after_seconds=2.0,
        phase_reasoning_after_seconds=5.0,
        phase_validating_after_seconds=9.0,
        progress_tick_seconds=0.8,
    )
    return PhaseTicker(scheduler, settings, rng=random.Random(7))


class TestPhaseSchedule:
    def test_starts_idle(self, scheduler: ManualScheduler) -> None:
        ticker = _make_ticker(scheduler)

        assert ticker.stage is ProcessingStage.IDLE
        assert ticker.message == "Ready to process"
        assert ticker.progress == 0.0

    def test_start_enters_uploading(self, scheduler: ManualScheduler) -> None:
        ticker = _make_ticker(scheduler)

        ticker.start()

        assert ticker.stage is ProcessingStage.UPLOADING
        assert ticker.progress == 10.0
        assert sorted(t.delay_seconds for t in scheduler.pending()) == [0.8, 2.0, 5.0, 9.0]

    def test_walks_through_stages_on_schedule(self, scheduler: ManualScheduler) -> None:
        ticker = _make_ticker(scheduler)
        ticker.start()

        scheduler.fire(2.0)
        assert ticker.stage is ProcessingStage.OCR
        scheduler.fire(5.0)
        assert ticker.stage is ProcessingStage.REASONING
        scheduler.fire(9.0)
        assert ticker.stage is ProcessingStage.VALIDATING
        assert ticker.message == STAGE_MESSAGES[ProcessingStage.VALIDATING]

    def test_stop_cancels_timers_and_completes(self, scheduler: ManualScheduler) -> None:
        ticker = _make_ticker(scheduler)
        ticker.start()

        ticker.stop()

        assert ticker.stage is ProcessingStage.COMPLETE
        assert ticker.progress == 100.0
        assert ticker.message == "Processing complete."
        assert scheduler.pending() == []

    def test_late_timer_after_stop_is_ignored(self, scheduler: ManualScheduler) -> None:
        ticker = _make_ticker(scheduler)
        ticker.start()
        ocr_task = next(t for t in scheduler.tasks if t.delay_seconds == 2.0)

        ticker.stop()
        ocr_task.callback()

        assert ticker.stage is ProcessingStage.COMPLETE


class TestSimulatedProgress:
    def test_ticks_increase_progress_up_to_ceiling(self, scheduler: ManualScheduler) -> None:
        ticker = _make_ticker(scheduler)
        ticker.start()
        previous = ticker.progress

        for _ in range(50):
            scheduler.fire(0.8)
            assert previous <= ticker.progress <= 90.0
            previous = ticker.progress

        assert ticker.progress == 90.0

    def test_each_tick_schedules_the_next(self, scheduler: ManualScheduler) -> None:
        ticker = _make_ticker(scheduler)
        ticker.start()

        scheduler.fire(0.8)

        assert [t.delay_seconds for t in scheduler.pending()].count(0.8) == 1

    def test_restart_resets_schedule(self, scheduler: ManualScheduler) -> None:
        ticker = _make_ticker(scheduler)
        ticker.start()
        scheduler.fire(2.0)

        ticker.start()

        assert ticker.stage is ProcessingStage.UPLOADING
        assert len(scheduler.pending()) == 4
