class ExtractionError(Exception):
    """Raised when the extraction service cannot produce a result."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the extraction call fails due to network/infrastructure issues."""


class ExtractionResponseError(ExtractionError):
    """Raised when the service answers with an error or an unusable payload."""
