class SuggestionError(Exception):
    """Base exception for suggestion generation."""


class SuggestionValidationError(SuggestionError):
    """Raised when an LLM reply does not have the expected shape."""
