"""Extraction strategies that the cascade walks for images and PDFs.

Each strategy turns whatever its backend returned into an Outcome holding
an ExtractionResult, so the cascade only ever sees the normalized shape.
"""

import asyncio

from docintel.cascade.cascade import Outcome, SoftFailure, Success
from docintel.extraction.local_fields import extract_local_fields
from docintel.extraction.models import ExtractionResult, UploadedDocument
from docintel.logging.logger import Log
from docintel.parsing.json_extractor import extract_json_object, strip_code_fence
from docintel.pdf.base import BasePdfExtractor
from docintel.pdf.exceptions import PdfExtractionError
from docintel.providers.client_base import BaseProviderClient
from docintel.providers.models import ErrorKind, ProviderRequest

STRUCTURED_CONFIDENCE = 0.95
BYTEZ_CONFIDENCE = 0.85
TEXT_ONLY_CONFIDENCE = 0.7

# Keys that carry document text rather than a structured field.
TEXT_KEYS = ("ocr_text", "ocrText", "text", "generated_text", "summary_text", "raw_text_snippet")
NON_FIELD_KEYS = frozenset(("doc_type", *TEXT_KEYS))


class ProviderExtractionStrategy:
    """Sends the document to one vision-capable provider."""

    def __init__(
        self,
        client: BaseProviderClient,
        model_id: str,
        *,
        system_prompt: str,
        user_prompt_template: str,
        structured_confidence: float = STRUCTURED_CONFIDENCE,
        prose_confidence: float = TEXT_ONLY_CONFIDENCE,
        max_tokens: int = 2000,
    ) -> None:
        self._client = client
        self._model_id = model_id
        self._system_prompt = system_prompt
        self._user_prompt_template = user_prompt_template
        self._structured_confidence = structured_confidence
        self._prose_confidence = prose_confidence
        self._max_tokens = max_tokens

    @property
    def provider_id(self) -> str:
        return self._client.provider_id

    async def run(self, document: UploadedDocument) -> Outcome[ExtractionResult]:
        request = ProviderRequest(
            prompt=self._user_prompt_template.format(file_name=document.file_name),
            system_prompt=self._system_prompt,
            document=document.content,
            mime_type=document.mime_type,
            file_name=document.file_name,
            max_tokens=self._max_tokens,
        )
        response = await self._client.call(self._model_id, request)
        if not response.ok:
            return SoftFailure(
                response.error_kind or ErrorKind.PROVIDER_CALL_FAILED,
                response.error or "",
            )
        Log.debug(f"{self.provider_id} raw extraction output: {response.output!r}")
        return normalize_provider_output(
            response.output,
            structured_confidence=self._structured_confidence,
            prose_confidence=self._prose_confidence,
        )


class PdfTextLayerStrategy:
    """Reads the embedded PDF text layer locally; last resort for PDFs."""

    def __init__(
        self,
        extractor: BasePdfExtractor,
        confidence: float = TEXT_ONLY_CONFIDENCE,
    ) -> None:
        self._extractor = extractor
        self._confidence = confidence

    @property
    def provider_id(self) -> str:
        return f"local:{self._extractor.engine}"

    async def run(self, document: UploadedDocument) -> Outcome[ExtractionResult]:
        try:
            pdf_text = await asyncio.to_thread(self._extractor.extract, document.content)
        except PdfExtractionError as exc:
            return SoftFailure(ErrorKind.PARSE_ERROR, str(exc))

        text = pdf_text.text
        if not text:
            return SoftFailure(
                ErrorKind.EMPTY_EXTRACTION,
                f"PDF has no text layer ({pdf_text.page_count} pages)",
            )
        return Success(
            ExtractionResult(
                doc_type="pdf",
                fields=extract_local_fields(text, file_name=document.file_name),
                raw_text=text,
                ocr_text=text,
                confidence=self._confidence,
                local=True,
            )
        )


def normalize_provider_output(
    output: object,
    *,
    structured_confidence: float,
    prose_confidence: float,
) -> Outcome[ExtractionResult]:
    """Map a provider's raw output onto an extraction Outcome.

    Objects (or text holding a JSON object) become structured results.
    Plain prose is kept as raw text at prose_confidence. Text that looks
    like JSON but does not parse is a PARSE_ERROR.
    """
    if isinstance(output, list):
        output = output[0] if output else None

    if isinstance(output, dict):
        return _structured_result(output, structured_confidence)

    text = output if isinstance(output, str) else ("" if output is None else str(output))
    parsed = extract_json_object(text)
    if parsed is not None:
        return _structured_result(parsed, structured_confidence)

    prose = strip_code_fence(text)
    if not prose:
        return SoftFailure(ErrorKind.EMPTY_EXTRACTION, "provider returned no text")
    if prose.startswith("{"):
        return SoftFailure(ErrorKind.PARSE_ERROR, "provider returned malformed JSON")
    return Success(
        ExtractionResult(
            doc_type="other",
            raw_text=prose,
            ocr_text=prose,
            confidence=prose_confidence,
        )
    )


def _structured_result(data: dict[str, object], confidence: float) -> Outcome[ExtractionResult]:
    text = ""
    for key in TEXT_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            text = value.strip()
            break

    fields = {
        key: value
        for key, value in data.items()
        if key not in NON_FIELD_KEYS and value not in (None, "", [], {})
    }
    if not fields and not text:
        return SoftFailure(ErrorKind.EMPTY_EXTRACTION, "provider returned an empty object")

    snippet = data.get("raw_text_snippet")
    raw_text = snippet.strip() if isinstance(snippet, str) and snippet.strip() else text
    return Success(
        ExtractionResult(
            doc_type=str(data.get("doc_type") or "other"),
            fields=fields,
            raw_text=raw_text,
            ocr_text=text,
            confidence=confidence,
        )
    )
