from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    """Failure classes shared by every stage of the pipeline."""

    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_CALL_FAILED = "provider_call_failed"
    PARSE_ERROR = "parse_error"
    UNSUPPORTED_MIME_TYPE = "unsupported_mime_type"
    EMPTY_EXTRACTION = "empty_extraction"
    UNSUPPORTED_EXTRACTION = "unsupported_extraction"
    STORAGE_WRITE_FAILED = "storage_write_failed"


@dataclass(frozen=True)
class ProviderRequest:
    """Input handed to a provider client.

    Text-only backends read `prompt`; vision backends also read `document`.
    `options` carries backend-specific knobs (summary length, language).
    """

    prompt: str = ""
    system_prompt: str = ""
    document: bytes | None = None
    mime_type: str = ""
    file_name: str = ""
    max_tokens: int | None = None
    options: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderResponse:
    """Normalized `{output?, error?}` reply of a provider call."""

    output: object | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ProviderResponse":
        return cls(error=message, error_kind=kind)
