from abc import ABC, abstractmethod
from dataclasses import dataclass

from docintel.extraction.models import ExtractionResult, UploadedDocument
from docintel.suggestions.models import SuggestionBundle


@dataclass(slots=True)
class PipelineContext:
    document: UploadedDocument
    owner_id: str
    extraction: ExtractionResult | None = None
    extracted_data: dict[str, object] | None = None
    summary: str = ""
    summary_provider: str | None = None
    suggestions: SuggestionBundle | None = None
    asset_id: str | None = None


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
