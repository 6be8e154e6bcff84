from abc import ABC, abstractmethod

from rxsync.batch.models import SourceFile
from rxsync.extraction.models import ExtractionResult


class BaseExtractionClient(ABC):
    """Contract for all extraction service adapters."""

    @abstractmethod
    def extract(self, source_file: SourceFile) -> ExtractionResult:
        """Run OCR and entity reasoning on one document image.

        Args:
            source_file: The uploaded image.

        Returns:
            ExtractionResult with the raw text and the MedicalDocument XML.

        Raises:
            ExtractionError: on any failure, with a human-readable message.
        """

    def close(self) -> None:
        """Release transport resources. Adapters without any keep the no-op."""
