class ExtractionError(Exception):
    """Base exception for local extraction failures."""


class OfficeExtractionError(ExtractionError):
    """Raised when an office document cannot be opened."""
