from typing import Any

import httpx

from rxsync.batch.models import SourceFile
from rxsync.extraction.base import BaseExtractionClient
from rxsync.extraction.exceptions import (
    ExtractionNetworkError,
    ExtractionResponseError,
)
from rxsync.extraction.models import ExtractionResult
from rxsync.logging.logger import Log

DEFAULT_FAILURE_MESSAGE = "Server processing failed"


class HttpExtractionClient(BaseExtractionClient):
    """Posts one image per request to the extraction service's HTTP endpoint."""

    FORM_FIELD = "image"

    def __init__(
        self,
        *,
        base_url: str,
        endpoint: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    def extract(self, source_file: SourceFile) -> ExtractionResult:
        files = {
            self.FORM_FIELD: (
                source_file.filename,
                source_file.content,
                source_file.content_type,
            )
        }
        try:
            response = self._client.post(self._endpoint, files=files)
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(
                f"Extraction service network error: {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ExtractionNetworkError(
                f"Extraction service transport error: {exc}"
            ) from exc

        Log.debug(
            f"Extraction service answered {response.status_code} for {source_file.filename}"
        )
        if not response.is_success:
            raise ExtractionResponseError(self._failure_message(response))
        return self._parse_result(response)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpExtractionClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _failure_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return DEFAULT_FAILURE_MESSAGE
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message:
                return message
        return DEFAULT_FAILURE_MESSAGE

    @staticmethod
    def _parse_result(response: httpx.Response) -> ExtractionResult:
        try:
            body: Any = response.json()
        except ValueError as exc:
            raise ExtractionResponseError(f"Invalid JSON response: {exc}") from exc
        if not isinstance(body, dict):
            raise ExtractionResponseError("JSON response must be an object")

        raw_text = body.get("rawText", "")
        if raw_text is None:
            raw_text = ""
        if not isinstance(raw_text, str):
            raise ExtractionResponseError("'rawText' must be a string")

        xml = body.get("xml", body.get("structuredOutput"))
        if not isinstance(xml, str):
            raise ExtractionResponseError("'xml' must be a string")
        return ExtractionResult(raw_text=raw_text, structured_output=xml)
