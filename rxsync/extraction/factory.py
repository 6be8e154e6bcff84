from typing import ClassVar

from rxsync.config.settings import Settings
from rxsync.extraction.base import BaseExtractionClient
from rxsync.extraction.example_client_adapter import ExampleExtractionClient
from rxsync.extraction.http_client_adapter import HttpExtractionClient


class ExtractionClientFactory:
    """Creates the configured extraction client."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("http", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractionClient:
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return ExampleExtractionClient()
        if provider == "http":
            base_url = settings.extraction_base_url.strip()
            if not base_url:
                raise ValueError(
                    "extraction_base_url is required for extraction_provider=http"
                )
            return HttpExtractionClient(
                base_url=base_url,
                endpoint=settings.extraction_endpoint,
                timeout_seconds=settings.extraction_timeout_seconds,
            )
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
