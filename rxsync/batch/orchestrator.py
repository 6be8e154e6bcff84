import threading

from rxsync.batch.models import (
    BatchRunResult,
    DocumentRecord,
    RecordStatus,
    WorkflowStep,
)
from rxsync.batch.phase import PhaseTicker
from rxsync.batch.scheduler import BaseScheduler
from rxsync.batch.store import RecordStore
from rxsync.config.settings import Settings
from rxsync.extraction.base import BaseExtractionClient
from rxsync.logging.logger import Log
from rxsync.notifications.base import BaseNotifier
from rxsync.notifications.models import NotificationKind

PROCESSING_PROGRESS = 30
FALLBACK_ERROR_MESSAGE = "Extraction failed"


class BatchOrchestrator:
    """Drives eligible records through the extraction service one at a time.

    Runs: mark processing -> extract -> complete (append output) or error.
    With ``failure_policy="abort"`` the first failure ends the run and the
    remaining records keep their status; ``"isolate"`` carries on with the
    next record.
    """

    def __init__(
        self,
        store: RecordStore,
        client: BaseExtractionClient,
        ticker: PhaseTicker,
        scheduler: BaseScheduler,
        notifier: BaseNotifier,
        settings: Settings,
    ) -> None:
        self._store = store
        self._client = client
        self._ticker = ticker
        self._scheduler = scheduler
        self._notifier = notifier
        self._settings = settings
        self._run_lock = threading.Lock()
        self._processing = False

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def phase(self) -> PhaseTicker:
        return self._ticker

    def run_batch(self) -> BatchRunResult | None:
        """Process every pending or failed record in batch order.

        Returns None when there is nothing to do or a run is already in flight.
        """
        if not self._run_lock.acquire(blocking=False):
            Log.warning("Batch run already in progress, ignoring request")
            return None
        try:
            eligible = self._store.eligible()
            if not eligible:
                Log.debug("No pending documents, nothing to process")
                return None
            return self._run(eligible)
        finally:
            self._run_lock.release()

    def _run(self, eligible: tuple[DocumentRecord, ...]) -> BatchRunResult:
        Log.info(f"Starting batch run for {len(eligible)} document(s)")
        self._processing = True
        self._store.set_step(WorkflowStep.PROCESSING)
        self._ticker.start()

        success_count = 0
        failures: list[tuple[str, str]] = []
        try:
            for index, record in enumerate(eligible):
                if self._store.get(record.id) is None:
                    Log.info(f"Document {record.id} was removed, skipping")
                    continue
                self._store.update(
                    record.id, status=RecordStatus.PROCESSING, progress=PROCESSING_PROGRESS
                )
                try:
                    result = self._client.extract(record.source_file)
                except Exception as exc:
                    message = str(exc) or FALLBACK_ERROR_MESSAGE
                    self._mark_failed(record, message)
                    failures.append((record.id, message))
                    if self._settings.failure_policy == "abort":
                        Log.warning(
                            "Aborting batch run after first failure",
                            skipped=len(eligible) - index - 1,
                        )
                        break
                    continue
                if self._store.complete(record.id, result.raw_text, result.structured_output):
                    success_count += 1
                    Log.info(
                        f"Extracted {record.source_file.filename}",
                        chars=len(result.raw_text),
                    )
                else:
                    Log.info(f"Discarding late result for removed document {record.id}")
        finally:
            self._ticker.stop()
            self._processing = False

        if failures:
            self._notifier.notify(
                NotificationKind.ERROR, "Processing Failed", failures[0][1]
            )
        if success_count > 0:
            self._schedule_results(success_count)

        Log.info(
            f"Batch run finished: {success_count} succeeded, {len(failures)} failed"
        )
        return BatchRunResult(success_count=success_count, failures=tuple(failures))

    def _mark_failed(self, record: DocumentRecord, message: str) -> None:
        self._store.update(record.id, status=RecordStatus.ERROR, error_message=message)
        Log.error(f"Extraction failed for {record.source_file.filename}: {message}")

    def _schedule_results(self, success_count: int) -> None:
        delay = self._settings.results_delay_seconds
        if delay <= 0:
            self._show_results(success_count)
            return
        self._scheduler.schedule(delay, lambda: self._show_results(success_count))

    def _show_results(self, success_count: int) -> None:
        self._store.set_step(WorkflowStep.RESULTS)
        self._notifier.notify(
            NotificationKind.SUCCESS,
            "Extraction Successful",
            f"Successfully processed {success_count} document(s).",
        )
