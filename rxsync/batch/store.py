import threading
import time
import uuid
from collections.abc import Iterable
from dataclasses import replace

from rxsync.batch.models import (
    DocumentRecord,
    RecordStatus,
    SourceFile,
    WorkflowStep,
)
from rxsync.batch.preview import BasePreviewProvider
from rxsync.logging.logger import Log
from rxsync.notifications.base import BaseNotifier
from rxsync.notifications.models import NotificationKind

RAW_TEXT_SEPARATOR = "\n\n--- Next Document ---\n\n"
IMMUTABLE_FIELDS = frozenset({"id", "source_file", "preview"})


class RecordStore:
    """In-memory batch of document records.

    The record sequence is an immutable tuple that is only ever swapped whole
    through ``_replace``; every swap bumps ``version``. Readers therefore always
    see a consistent snapshot, even while the orchestrator is mid-run.
    """

    def __init__(
        self,
        preview_provider: BasePreviewProvider,
        notifier: BaseNotifier,
    ) -> None:
        self._preview_provider = preview_provider
        self._notifier = notifier
        self._lock = threading.RLock()
        self._records: tuple[DocumentRecord, ...] = ()
        self._version = 0
        self._combined_output = ""
        self._step = WorkflowStep.UPLOAD

    @property
    def records(self) -> tuple[DocumentRecord, ...]:
        return self._records

    @property
    def version(self) -> int:
        return self._version

    @property
    def combined_output(self) -> str:
        return self._combined_output

    @property
    def step(self) -> WorkflowStep:
        return self._step

    @property
    def has_pending(self) -> bool:
        return any(r.status is RecordStatus.PENDING for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: str) -> DocumentRecord | None:
        return next((r for r in self._records if r.id == record_id), None)

    def eligible(self) -> tuple[DocumentRecord, ...]:
        """Records a batch run would pick up, in batch order."""
        return tuple(r for r in self._records if r.is_eligible)

    def full_raw_text(self) -> str:
        return RAW_TEXT_SEPARATOR.join(r.raw_text for r in self._records)

    def add_files(self, files: Iterable[SourceFile]) -> list[DocumentRecord]:
        """Queue one pending record per file, keeping the supplied order."""
        files = list(files)
        stamp = int(time.time() * 1000)
        with self._lock:
            new_records = [
                DocumentRecord(
                    id=self._new_id(stamp, index, source_file.filename),
                    source_file=source_file,
                    preview=self._preview_provider.acquire(source_file),
                )
                for index, source_file in enumerate(files)
            ]
            self._replace(self._records + tuple(new_records))
        Log.info(f"Added {len(new_records)} document(s) to the batch")
        self._notifier.notify(
            NotificationKind.INFO,
            "Documents Added",
            f"{len(files)} file(s) ready for processing.",
        )
        return new_records

    def remove(self, record_id: str) -> bool:
        """Drop a record and release its preview. Unknown ids are ignored."""
        with self._lock:
            record = self.get(record_id)
            if record is None:
                return False
            remaining = tuple(r for r in self._records if r.id != record_id)
            self._replace(remaining)
            self._preview_provider.release(record.preview)
            if not remaining:
                self._combined_output = ""
                self._step = WorkflowStep.UPLOAD
        Log.info(f"Removed document {record_id}")
        return True

    def clear(self) -> None:
        """Remove every record in the batch."""
        for record in self._records:
            self.remove(record.id)

    def retry_failed(self) -> int:
        """Requeue failed records and start a fresh batch output.

        Combined output is discarded for the whole batch, including the
        contribution of records that stay complete.
        """
        with self._lock:
            failed = sum(1 for r in self._records if r.status is RecordStatus.ERROR)
            self._replace(
                tuple(
                    replace(r, status=RecordStatus.PENDING, error_message=None, progress=0)
                    if r.status is RecordStatus.ERROR
                    else r
                    for r in self._records
                )
            )
            self._step = WorkflowStep.UPLOAD
            self._combined_output = ""
        Log.info(f"Requeued {failed} failed document(s)")
        return failed

    def update(self, record_id: str, **patch: object) -> bool:
        """Merge ``patch`` into the record. Unknown ids are ignored.

        Identity fields (``id``, ``source_file``, ``preview``) are fixed at
        creation and raise TypeError, as unknown fields do.
        """
        locked = IMMUTABLE_FIELDS.intersection(patch)
        if locked:
            raise TypeError(f"Cannot update immutable field(s): {', '.join(sorted(locked))}")
        with self._lock:
            if self.get(record_id) is None:
                Log.debug(f"Ignoring update for unknown document {record_id}")
                return False
            self._replace(
                tuple(
                    replace(r, **patch) if r.id == record_id else r  # type: ignore[arg-type]
                    for r in self._records
                )
            )
        return True

    def complete(self, record_id: str, raw_text: str, structured_output: str) -> bool:
        """Mark a record complete and append its output to the combined buffer.

        Returns False (and appends nothing) when the record is gone.
        """
        with self._lock:
            applied = self.update(
                record_id,
                status=RecordStatus.COMPLETE,
                progress=100,
                raw_text=raw_text,
                structured_output=structured_output,
                error_message=None,
            )
            if applied:
                self._combined_output = (
                    f"{self._combined_output}\n{structured_output}"
                    if self._combined_output
                    else structured_output
                )
        return applied

    def set_step(self, step: WorkflowStep) -> None:
        self._step = step

    def _replace(self, records: tuple[DocumentRecord, ...]) -> None:
        self._records = records
        self._version += 1

    @staticmethod
    def _new_id(stamp: int, index: int, filename: str) -> str:
        return f"{stamp}-{index}-{filename}-{uuid.uuid4().hex[:8]}"
