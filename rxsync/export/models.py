from dataclasses import dataclass
from enum import Enum


class ExportFormat(str, Enum):
    XML = "xml"
    CSV = "csv"


@dataclass(frozen=True)
class ExportArtifact:
    """A downloadable export: file name, content type and text body."""

    filename: str
    content_type: str
    content: str
