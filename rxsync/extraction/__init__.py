from rxsync.extraction.base import BaseExtractionClient
from rxsync.extraction.exceptions import (
    ExtractionError,
    ExtractionNetworkError,
    ExtractionResponseError,
)
from rxsync.extraction.factory import ExtractionClientFactory
from rxsync.extraction.models import ExtractionResult

__all__ = [
    "BaseExtractionClient",
    "ExtractionClientFactory",
    "ExtractionError",
    "ExtractionNetworkError",
    "ExtractionResponseError",
    "ExtractionResult",
]
