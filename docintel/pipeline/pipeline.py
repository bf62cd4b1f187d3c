from collections.abc import Sequence

from docintel.extraction.fields import to_field_list
from docintel.extraction.models import UploadedDocument
from docintel.logging.logger import Log
from docintel.pipeline.context import PipelineContext, PipelineStep
from docintel.pipeline.exceptions import EmptyUploadError
from docintel.pipeline.models import NO_FIELDS_MESSAGE, QUOTA_WARNING, AnalysisResponse


class DocumentPipeline:
    """Analyzes one uploaded document.

    Pipeline: extract -> summarize -> suggest -> sanitize -> persist.
    Provider failures degrade the response instead of failing it; only an
    empty upload or an unsupported document type raise.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    async def analyze(self, document: UploadedDocument, owner_id: str) -> AnalysisResponse:
        """Run every step and build the caller-facing response.

        Raises:
            EmptyUploadError: if the document has no content.
            UnsupportedDocumentError: if the mime type has no extraction path.
        """
        if not document.content:
            raise EmptyUploadError(f"No file content uploaded for '{document.file_name}'")

        Log.info(
            f"Analyzing {document.file_name} ({document.mime_type}, {document.size} bytes) "
            f"for owner {owner_id}"
        )
        context = PipelineContext(document=document, owner_id=owner_id)
        for step in self._steps:
            context = await step.run(context)
        return self._build_response(context)

    @staticmethod
    def _build_response(context: PipelineContext) -> AnalysisResponse:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set after the pipeline ran")
        extraction = context.extraction
        fields = to_field_list(extraction)

        warning = not fields
        if warning:
            Log.warning(f"No structured fields extracted from {context.document.file_name}")

        suggestions = context.suggestions
        summary_warning = QUOTA_WARNING if suggestions and suggestions.quota_limited else None

        return AnalysisResponse(
            fields=fields,
            extracted_data=context.extracted_data or {},
            summary=context.summary,
            suggestions=suggestions.to_dict() if suggestions else None,
            asset_id=context.asset_id,
            ocr_text=extraction.ocr_text,
            ocr_confidence=extraction.confidence,
            warning=warning,
            message=NO_FIELDS_MESSAGE if warning else None,
            summary_warning=summary_warning,
        )
