from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionResult:
    """Output of one extraction call: OCR text plus the structured XML fragment."""

    raw_text: str
    structured_output: str
