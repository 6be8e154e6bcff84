from pathlib import Path

from rxsync.batch.store import RecordStore
from rxsync.export.clipboard import BaseClipboard
from rxsync.export.exceptions import ExportError
from rxsync.export.models import ExportArtifact, ExportFormat
from rxsync.logging.logger import Log
from rxsync.notifications.base import BaseNotifier
from rxsync.notifications.models import NotificationKind
from rxsync.transform.markup_table import to_table

CONTENT_TYPES: dict[ExportFormat, str] = {
    ExportFormat.XML: "application/xml",
    ExportFormat.CSV: "text/csv",
}


class BatchExporter:
    """Turns the batch's combined output into XML/CSV artifacts."""

    def __init__(
        self,
        store: RecordStore,
        notifier: BaseNotifier,
        clipboard: BaseClipboard,
        basename: str,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._clipboard = clipboard
        self._basename = basename

    def export(self, fmt: ExportFormat | str) -> ExportArtifact | None:
        """Build the artifact for ``fmt``.

        Returns None when there is no output yet or the CSV conversion failed;
        the failure is reported through the notifier.

        Raises:
            ExportError: if ``fmt`` is not a supported format.
        """
        try:
            fmt = ExportFormat(fmt)
        except ValueError as exc:
            raise ExportError(
                f"Unknown export format '{fmt}'. Choose from: {[f.value for f in ExportFormat]}"
            ) from exc

        markup = self._store.combined_output
        if not markup:
            Log.debug("Nothing to export yet")
            return None

        content = markup if fmt is ExportFormat.XML else to_table(markup)
        if not content:
            self._notifier.notify(
                NotificationKind.ERROR, "Error", "Failed to convert to CSV."
            )
            return None

        artifact = ExportArtifact(
            filename=f"{self._basename}.{fmt.value}",
            content_type=CONTENT_TYPES[fmt],
            content=content,
        )
        self._notifier.notify(
            NotificationKind.INFO,
            "Download Started",
            f"{fmt.value.upper()} file saved to your device.",
        )
        return artifact

    def save(self, artifact: ExportArtifact, directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / artifact.filename
        path.write_text(artifact.content, encoding="utf-8")
        Log.info(f"Wrote {artifact.filename} ({len(artifact.content)} chars) to {directory}")
        return path

    def copy_to_clipboard(self) -> None:
        self._clipboard.write_text(self._store.combined_output)
        self._notifier.notify(NotificationKind.INFO, "Copied", "XML copied to clipboard.")
