import httpx

from docintel.config.settings import Settings
from docintel.extraction.factory import ExtractionCascadeFactory
from docintel.pipeline.actions import DocumentActionService
from docintel.pipeline.pipeline import DocumentPipeline
from docintel.pipeline.steps import ExtractStep, PersistStep, SuggestStep, SummarizeStep
from docintel.providers.factory import ProviderFactory
from docintel.storage.base import BaseStorage
from docintel.suggestions.suggester import ActionSuggester
from docintel.summarization.factory import SummarizerFactory
from docintel.summarization.text_store import TemporaryTextStore


def build_suggester(
    settings: Settings,
    text_store: TemporaryTextStore,
    http_client: httpx.AsyncClient | None = None,
) -> ActionSuggester:
    """Wire the action suggester.

    Its summarizer leaves out the reasoning LLM, which the suggester already
    falls back to for its executive summary.
    """
    summary_providers = [name for name in settings.summary_provider_order if name != "llm"]
    return ActionSuggester(
        summarizer=SummarizerFactory.create(
            settings, text_store, providers=summary_providers, http_client=http_client
        ),
        llm=ProviderFactory.create_llm(settings, http_client),
        llm_model=settings.llm_model_name,
        timeout_seconds=settings.provider_timeout_seconds,
    )


def build_pipeline(
    settings: Settings,
    storage: BaseStorage,
    text_store: TemporaryTextStore,
    http_client: httpx.AsyncClient | None = None,
) -> DocumentPipeline:
    """Wire every pipeline step from settings.

    Pass http_client to share one connection pool between all provider
    adapters; the caller owns it and closes it.
    """
    return DocumentPipeline(
        [
            ExtractStep(
                ExtractionCascadeFactory.create(settings, http_client),
                settings.raw_snippet_chars,
            ),
            SummarizeStep(
                SummarizerFactory.create(settings, text_store, http_client=http_client),
                settings.summary_min_chars,
            ),
            SuggestStep(build_suggester(settings, text_store, http_client)),
            PersistStep(storage, settings.max_snippet_chars),
        ]
    )


def build_action_service(
    settings: Settings,
    storage: BaseStorage,
    text_store: TemporaryTextStore,
    http_client: httpx.AsyncClient | None = None,
) -> DocumentActionService:
    return DocumentActionService(storage, build_suggester(settings, text_store, http_client))
