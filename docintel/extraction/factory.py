import httpx

from docintel.config.settings import Settings
from docintel.extraction.cascade import ExtractionCascade
from docintel.extraction.strategies import (
    BYTEZ_CONFIDENCE,
    STRUCTURED_CONFIDENCE,
    TEXT_ONLY_CONFIDENCE,
    PdfTextLayerStrategy,
    ProviderExtractionStrategy,
)
from docintel.pdf.factory import PdfExtractorFactory
from docintel.prompts.prompt_loader import load_prompt_template
from docintel.providers.factory import ProviderFactory


class ExtractionCascadeFactory:
    """Builds the extraction cascade from settings.extraction_providers."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> ExtractionCascade:
        system_prompt = load_prompt_template("extraction_system")
        user_prompt_template = load_prompt_template("extraction_user")

        strategies = []
        for name in settings.extraction_provider_order:
            client = ProviderFactory.create(name, settings, http_client)
            structured, prose = (
                (BYTEZ_CONFIDENCE, BYTEZ_CONFIDENCE)
                if name == "bytez"
                else (STRUCTURED_CONFIDENCE, TEXT_ONLY_CONFIDENCE)
            )
            strategies.append(
                ProviderExtractionStrategy(
                    client,
                    ProviderFactory.model_for(name, settings),
                    system_prompt=system_prompt,
                    user_prompt_template=user_prompt_template,
                    structured_confidence=structured,
                    prose_confidence=prose,
                )
            )

        return ExtractionCascade(
            vision_strategies=strategies,
            pdf_fallback=PdfTextLayerStrategy(PdfExtractorFactory.create(settings)),
            timeout_seconds=settings.provider_timeout_seconds,
        )
