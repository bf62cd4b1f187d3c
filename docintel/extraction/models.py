from dataclasses import dataclass, field

from docintel.cascade.cascade import ProviderAttempt
from docintel.providers.models import ErrorKind


@dataclass(frozen=True)
class UploadedDocument:
    """A single uploaded file as received from the caller."""

    content: bytes
    file_name: str
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ExtractedField:
    """Flat field entry returned to API callers."""

    key: str
    value: str
    confidence: float
    is_redacted: bool = False


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized output of the extraction cascade.

    fields holds the structured values (issuer, amount_due, ...); raw_text is
    the text the summarizer works on and ocr_text the full readable text
    when a provider returned one. local marks results built by the regex
    pass rather than a provider.
    """

    doc_type: str = "other"
    fields: dict[str, object] = field(default_factory=dict)
    raw_text: str = ""
    ocr_text: str = ""
    confidence: float = 0.0
    provider_id: str | None = None
    error: ErrorKind | None = None
    attempts: list[ProviderAttempt] = field(default_factory=list)
    local: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")

    @property
    def text(self) -> str:
        """Best available document text: OCR text first, then raw text."""
        return self.ocr_text or self.raw_text

    @property
    def has_fields(self) -> bool:
        return any(key != "file_name" for key in self.fields)

    def extracted_data(self, snippet_chars: int) -> dict[str, object]:
        """Extracted data as persisted and fed to the suggester."""
        data: dict[str, object] = {"doc_type": self.doc_type}
        data.update(self.fields)
        data["raw_text_snippet"] = self.raw_text[:snippet_chars]
        return data
