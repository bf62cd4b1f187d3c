from dataclasses import asdict, dataclass, field

from docintel.extraction.models import ExtractedField

NO_FIELDS_MESSAGE = (
    "No structured data extracted. This may be because:\n"
    "- Document is image-only and OCR failed (try a clearer scan)\n"
    "- Document format is not fully supported\n"
    "- Document is encrypted or corrupted\n\n"
    "You can still view the extracted text in the OCR preview."
)
QUOTA_WARNING = "Premium summarization unavailable (model quota). Using fallback summary."


@dataclass(frozen=True)
class AnalysisResponse:
    """Result of analyzing one uploaded document."""

    fields: list[ExtractedField] = field(default_factory=list)
    extracted_data: dict[str, object] = field(default_factory=dict)
    summary: str = ""
    suggestions: dict[str, object] | None = None
    asset_id: str | None = None
    ocr_text: str = ""
    ocr_confidence: float = 0.0
    warning: bool = False
    message: str | None = None
    summary_warning: str | None = None

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        for key in ("message", "summary_warning"):
            if data[key] is None:
                data.pop(key)
        if not self.warning:
            data.pop("warning")
        return data


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a re-run action against a persisted document."""

    action_type: str
    status: str
    result: dict[str, object] = field(default_factory=dict)
    log_id: str | None = None
