import base64
from dataclasses import asdict
from datetime import datetime, timezone

from docintel.extraction.cascade import ExtractionCascade, resolve_mime_type
from docintel.extraction.fields import to_field_list
from docintel.logging.logger import Log
from docintel.pipeline.context import PipelineContext, PipelineStep
from docintel.pipeline.exceptions import UnsupportedDocumentError
from docintel.providers.models import ErrorKind
from docintel.sanitization.sanitizer import clean_object, prepare_for_storage, sanitize_text
from docintel.storage.base import BaseStorage
from docintel.storage.exceptions import StorageError
from docintel.storage.models import PersistableDocumentAsset
from docintel.suggestions.suggester import ActionSuggester
from docintel.summarization.heuristic import heuristic_summary
from docintel.summarization.summarizer import HEURISTIC_PROVIDER_ID, Summarizer

URL_PREVIEW_CHARS = 100


class ExtractStep(PipelineStep):
    def __init__(self, cascade: ExtractionCascade, raw_snippet_chars: int) -> None:
        self._cascade = cascade
        self._raw_snippet_chars = raw_snippet_chars

    async def run(self, context: PipelineContext) -> PipelineContext:
        result = await self._cascade.extract(context.document)
        if result.error is ErrorKind.UNSUPPORTED_MIME_TYPE:
            raise UnsupportedDocumentError(resolve_mime_type(context.document))
        context.extraction = result
        context.extracted_data = result.extracted_data(self._raw_snippet_chars)
        Log.info(
            f"Extracted {len(result.fields)} fields and {len(result.text)} chars from "
            f"{context.document.file_name} via {result.provider_id or 'nothing'}"
        )
        return context


class SummarizeStep(PipelineStep):
    """Summarizes the document text; short text is used as its own summary."""

    def __init__(self, summarizer: Summarizer, min_chars: int) -> None:
        self._summarizer = summarizer
        self._min_chars = min_chars

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before summarization")
        extraction = context.extraction
        text = extraction.text.strip()

        if len(text) >= self._min_chars:
            result = await self._summarizer.summarize(
                text,
                fields=extraction.fields,
                doc_type=extraction.doc_type,
            )
            context.summary = result.summary
            context.summary_provider = result.provider_id
        elif text:
            context.summary = text
            context.summary_provider = "text"
        else:
            context.summary = heuristic_summary(text, extraction.fields, extraction.doc_type)
            context.summary_provider = HEURISTIC_PROVIDER_ID

        Log.info(
            f"Summary for {context.document.file_name}: {len(context.summary)} chars "
            f"via {context.summary_provider}"
        )
        return context


class SuggestStep(PipelineStep):
    def __init__(self, suggester: ActionSuggester) -> None:
        self._suggester = suggester

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None or context.extracted_data is None:
            raise ValueError("PipelineContext.extraction must be set before suggestions")
        context.suggestions = await self._suggester.suggest(
            context.extracted_data,
            context.extraction.text,
        )
        Log.info(
            f"Generated suggestions for {context.document.file_name}: "
            f"{len(context.suggestions.tasks.tasks)} tasks"
        )
        return context


class PersistStep(PipelineStep):
    """Writes the sanitized analysis as an asset; storage failures are not fatal."""

    def __init__(self, storage: BaseStorage, max_snippet_chars: int) -> None:
        self._storage = storage
        self._max_snippet_chars = max_snippet_chars

    async def run(self, context: PipelineContext) -> PipelineContext:
        asset = build_persistable_asset(context, self._max_snippet_chars)
        try:
            stored = await self._storage.create_asset(
                owner_id=asset.owner_id,
                type=asset.type,
                name=asset.name,
                url=asset.url,
                metadata=asset.metadata,
            )
        except StorageError as exc:
            Log.error(
                f"{ErrorKind.STORAGE_WRITE_FAILED.value}: could not save "
                f"{context.document.file_name}: {exc}"
            )
            context.asset_id = None
            return context

        context.asset_id = stored.id
        Log.info(f"Saved document asset {stored.id} for {context.document.file_name}")
        return context


def build_persistable_asset(
    context: PipelineContext,
    max_snippet_chars: int,
) -> PersistableDocumentAsset:
    """Sanitized, size-bounded projection of an analyzed document."""
    if context.extraction is None:
        raise ValueError("PipelineContext.extraction must be set before persisting")
    document = context.document
    extraction = context.extraction
    mime_type = sanitize_text(document.mime_type) or "application/octet-stream"

    ocr_text = None
    if extraction.ocr_text:
        ocr_text = prepare_for_storage(
            {"ocr_text": extraction.ocr_text}, max_snippet_chars
        )["ocr_text"]

    metadata = {
        "original_name": document.file_name,
        "mime_type": mime_type,
        "size": document.size,
        "extracted_fields": [asdict(f) for f in to_field_list(extraction)],
        "extracted_data": prepare_for_storage(context.extracted_data or {}, max_snippet_chars),
        "ocr_text": ocr_text,
        "ocr_confidence": extraction.confidence,
        "suggestions": context.suggestions.to_dict() if context.suggestions else None,
        "analysis_date": datetime.now(timezone.utc).isoformat(),
    }
    preview = base64.b64encode(document.content).decode("ascii")[:URL_PREVIEW_CHARS]
    return PersistableDocumentAsset(
        owner_id=sanitize_text(context.owner_id),
        name=sanitize_text(document.file_name),
        url=f"data:{mime_type};base64,{preview}",
        metadata=clean_object(metadata),
    )
