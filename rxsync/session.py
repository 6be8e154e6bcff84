from dataclasses import dataclass

from rxsync.batch.orchestrator import BatchOrchestrator
from rxsync.batch.phase import PhaseTicker
from rxsync.batch.preview import BasePreviewProvider, InMemoryPreviewProvider
from rxsync.batch.scheduler import BaseScheduler, ThreadingScheduler
from rxsync.batch.store import RecordStore
from rxsync.config.settings import Settings
from rxsync.export.clipboard import BaseClipboard, InMemoryClipboard
from rxsync.export.exporter import BatchExporter
from rxsync.extraction.base import BaseExtractionClient
from rxsync.extraction.factory import ExtractionClientFactory
from rxsync.notifications.base import BaseNotifier
from rxsync.notifications.log_notifier import LogNotifier


@dataclass
class BatchSession:
    """Everything a front end needs to drive one in-memory batch."""

    store: RecordStore
    orchestrator: BatchOrchestrator
    exporter: BatchExporter
    notifier: BaseNotifier
    client: BaseExtractionClient

    def close(self) -> None:
        """Release the extraction client."""
        self.client.close()


def build_session(
    settings: Settings,
    *,
    client: BaseExtractionClient | None = None,
    notifier: BaseNotifier | None = None,
    scheduler: BaseScheduler | None = None,
    preview_provider: BasePreviewProvider | None = None,
    clipboard: BaseClipboard | None = None,
) -> BatchSession:
    """Build a BatchSession with the configured adapters."""
    notifier = notifier or LogNotifier()
    scheduler = scheduler or ThreadingScheduler()
    client = client or ExtractionClientFactory.create(settings)
    store = RecordStore(preview_provider or InMemoryPreviewProvider(), notifier)
    orchestrator = BatchOrchestrator(
        store=store,
        client=client,
        ticker=PhaseTicker(scheduler, settings),
        scheduler=scheduler,
        notifier=notifier,
        settings=settings,
    )
    exporter = BatchExporter(
        store=store,
        notifier=notifier,
        clipboard=clipboard or InMemoryClipboard(),
        basename=settings.export_basename,
    )
    return BatchSession(
        store=store,
        orchestrator=orchestrator,
        exporter=exporter,
        notifier=notifier,
        client=client,
    )
