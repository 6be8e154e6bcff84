class ExportError(Exception):
    """Raised when an export is requested in an unsupported format."""
