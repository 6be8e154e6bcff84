import mimetypes
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path


class RecordStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"


ELIGIBLE_STATUSES = frozenset({RecordStatus.PENDING, RecordStatus.ERROR})


class WorkflowStep(IntEnum):
    """Which view of the batch workflow is active."""

    UPLOAD = 1
    PROCESSING = 2
    RESULTS = 3


class ProcessingStage(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    OCR = "ocr"
    REASONING = "reasoning"
    VALIDATING = "validating"
    COMPLETE = "complete"


STAGE_MESSAGES: dict[ProcessingStage, str] = {
    ProcessingStage.IDLE: "Ready to process",
    ProcessingStage.UPLOADING: "Securely encrypting and uploading to S3...",
    ProcessingStage.OCR: "AWS Textract: Analyzing physical document layout...",
    ProcessingStage.REASONING: "Gemini AI: Extracting clinical entities & logic...",
    ProcessingStage.VALIDATING: "Enforcing XML schema & medical compliance...",
    ProcessingStage.COMPLETE: "Processing complete.",
}


@dataclass(frozen=True)
class SourceFile:
    """An uploaded image: filename plus its bytes."""

    filename: str
    content: bytes = field(repr=False)
    content_type: str = ""

    def __post_init__(self) -> None:
        if not self.content_type:
            guessed, _ = mimetypes.guess_type(self.filename)
            object.__setattr__(
                self, "content_type", guessed or "application/octet-stream"
            )

    @classmethod
    def from_path(cls, path: Path) -> "SourceFile":
        return cls(filename=path.name, content=path.read_bytes())


@dataclass(frozen=True)
class PreviewHandle:
    """Token for a preview resource owned by exactly one record."""

    token: str
    url: str


@dataclass(frozen=True)
class DocumentRecord:
    """One uploaded file and its position in the extraction lifecycle.

    Records are immutable; the store swaps in updated copies.
    """

    id: str
    source_file: SourceFile
    preview: PreviewHandle
    status: RecordStatus = RecordStatus.PENDING
    progress: int = 0
    raw_text: str = ""
    structured_output: str = ""
    error_message: str | None = None

    @property
    def is_eligible(self) -> bool:
        return self.status in ELIGIBLE_STATUSES


@dataclass(frozen=True)
class BatchRunResult:
    """Outcome of one orchestrator run."""

    success_count: int
    failures: tuple[tuple[str, str], ...] = ()

    @property
    def failed(self) -> bool:
        return bool(self.failures)
