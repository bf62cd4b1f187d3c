import asyncio
import mimetypes
from collections.abc import Sequence
from dataclasses import replace
from enum import Enum
from functools import partial
from typing import Protocol

from docintel.cascade.cascade import CascadeStep, Outcome, first_success
from docintel.extraction.exceptions import OfficeExtractionError
from docintel.extraction.local_fields import extract_local_fields
from docintel.extraction.models import ExtractionResult, UploadedDocument
from docintel.extraction.office import DOCX_MIME_TYPE, DocxTextExtractor
from docintel.logging.logger import Log
from docintel.providers.models import ErrorKind

TEXT_LIKE_MIME_TYPES = frozenset((
    "application/json",
    "application/xml",
    "application/x-yaml",
    "application/yaml",
    "application/csv",
))

LOCAL_TEXT_CONFIDENCE = 0.9


class MimeCategory(str, Enum):
    TEXT = "text"
    OFFICE = "office"
    IMAGE = "image"
    PDF = "pdf"
    UNSUPPORTED = "unsupported"


class ExtractionStrategy(Protocol):
    @property
    def provider_id(self) -> str: ...

    async def run(self, document: UploadedDocument) -> Outcome[ExtractionResult]: ...


def resolve_mime_type(document: UploadedDocument) -> str:
    """Declared mime type without parameters, guessed from the name when generic."""
    mime_type = document.mime_type.split(";", 1)[0].strip().lower()
    if not mime_type or mime_type == "application/octet-stream":
        guessed, _ = mimetypes.guess_type(document.file_name)
        if guessed:
            return guessed
    return mime_type


def classify_mime_type(mime_type: str) -> MimeCategory:
    if mime_type.startswith("text/") or mime_type in TEXT_LIKE_MIME_TYPES:
        return MimeCategory.TEXT
    if mime_type == DOCX_MIME_TYPE:
        return MimeCategory.OFFICE
    if mime_type.startswith("image/"):
        return MimeCategory.IMAGE
    if mime_type == "application/pdf":
        return MimeCategory.PDF
    return MimeCategory.UNSUPPORTED


class ExtractionCascade:
    """Routes a document by mime type and extracts fields and text from it.

    Text and office documents are handled locally. Images walk the vision
    strategies in order; PDFs do the same and then fall back to the local
    text layer. Exhausting every strategy is not an error: the result carries
    UNSUPPORTED_EXTRACTION and a file-name placeholder field.
    """

    def __init__(
        self,
        *,
        vision_strategies: Sequence[ExtractionStrategy],
        pdf_fallback: ExtractionStrategy | None = None,
        office_extractor: DocxTextExtractor | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._vision_strategies = list(vision_strategies)
        self._pdf_fallback = pdf_fallback
        self._office_extractor = office_extractor or DocxTextExtractor()
        self._timeout_seconds = timeout_seconds

    async def extract(self, document: UploadedDocument) -> ExtractionResult:
        mime_type = resolve_mime_type(document)
        category = classify_mime_type(mime_type)
        Log.info(
            f"Extracting {document.file_name} ({mime_type or 'unknown'}, "
            f"{document.size} bytes) as {category.value}"
        )

        if category is MimeCategory.TEXT:
            text = document.content.decode("utf-8", errors="replace").strip()
            return self._local_result(document, text, doc_type="text")
        if category is MimeCategory.OFFICE:
            return await self._extract_office(document)
        if category is MimeCategory.UNSUPPORTED:
            Log.warning(f"Unsupported mime type {mime_type!r} for {document.file_name}")
            return ExtractionResult(
                doc_type="other",
                fields={"file_name": document.file_name},
                error=ErrorKind.UNSUPPORTED_MIME_TYPE,
            )

        strategies = list(self._vision_strategies)
        if category is MimeCategory.PDF and self._pdf_fallback is not None:
            strategies.append(self._pdf_fallback)
        return await self._run_cascade(document, strategies, category)

    async def _run_cascade(
        self,
        document: UploadedDocument,
        strategies: list[ExtractionStrategy],
        category: MimeCategory,
    ) -> ExtractionResult:
        steps = [
            CascadeStep(provider_id=strategy.provider_id, call=partial(strategy.run, document))
            for strategy in strategies
        ]
        outcome = await first_success(
            steps,
            timeout_seconds=self._timeout_seconds,
            label=f"extraction {document.file_name}",
        )
        if outcome.ok and outcome.value is not None:
            return replace(
                _with_resume_fields(outcome.value, document.file_name),
                provider_id=outcome.provider_id,
                attempts=outcome.attempts,
            )
        return ExtractionResult(
            doc_type=category.value,
            fields={"file_name": document.file_name},
            confidence=0.0,
            error=ErrorKind.UNSUPPORTED_EXTRACTION,
            attempts=outcome.attempts,
        )

    async def _extract_office(self, document: UploadedDocument) -> ExtractionResult:
        try:
            text = await asyncio.to_thread(self._office_extractor.extract, document.content)
        except OfficeExtractionError as exc:
            Log.warning(f"{document.file_name}: {exc}")
            text = ""
        if not text:
            return ExtractionResult(
                doc_type="document",
                fields={"file_name": document.file_name},
                provider_id="local:docx",
                error=ErrorKind.EMPTY_EXTRACTION,
                local=True,
            )
        return self._local_result(document, text, doc_type="document", provider_id="local:docx")

    @staticmethod
    def _local_result(
        document: UploadedDocument,
        text: str,
        *,
        doc_type: str,
        provider_id: str = "local:text",
    ) -> ExtractionResult:
        fields = extract_local_fields(text, file_name=document.file_name, doc_type=doc_type)
        Log.info(f"Local extraction found {len(fields)} fields in {document.file_name}")
        return ExtractionResult(
            doc_type=doc_type,
            fields=fields,
            raw_text=text,
            ocr_text=text,
            confidence=LOCAL_TEXT_CONFIDENCE if text else 0.0,
            provider_id=provider_id,
            local=True,
        )


def _with_resume_fields(result: ExtractionResult, file_name: str) -> ExtractionResult:
    """Fill email and phone from the text of resumes the provider left sparse."""
    if result.local:
        return result
    local = extract_local_fields(result.text, file_name=file_name, doc_type=result.doc_type)
    if "phone" not in local:
        return result
    fields = dict(result.fields)
    for key in ("recipient_email", "phone"):
        if key in local and key not in fields:
            fields[key] = local[key]
    return replace(result, fields=fields)
