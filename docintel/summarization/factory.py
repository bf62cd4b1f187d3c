from collections.abc import Sequence

import httpx

from docintel.config.settings import Settings
from docintel.prompts.prompt_loader import load_prompt_template
from docintel.providers.factory import ProviderFactory
from docintel.summarization.backends import (
    BaseSummaryBackend,
    PromptSummaryBackend,
    UrlSummaryBackend,
)
from docintel.summarization.summarizer import Summarizer
from docintel.summarization.text_store import TemporaryTextStore


class SummarizerFactory:
    """Builds the summarizer from settings.summary_providers."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        text_store: TemporaryTextStore,
        providers: Sequence[str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> Summarizer:
        names = settings.summary_provider_order if providers is None else providers
        backends = [cls.create_backend(name, settings, text_store, http_client) for name in names]
        return Summarizer(
            backends,
            max_chars=settings.summary_max_chars,
            overlap=settings.summary_chunk_overlap,
            max_depth=settings.summary_max_depth,
            timeout_seconds=settings.provider_timeout_seconds,
        )

    @classmethod
    def create_backend(
        cls,
        name: str,
        settings: Settings,
        text_store: TemporaryTextStore,
        http_client: httpx.AsyncClient | None = None,
    ) -> BaseSummaryBackend:
        client = ProviderFactory.create(name, settings, http_client)
        if name == "apyhub":
            return UrlSummaryBackend(
                client,
                ProviderFactory.model_for(name, settings),
                text_store=text_store,
                output_language=settings.apyhub_output_language,
            )
        if name == "bytez":
            return PromptSummaryBackend(client, settings.bytez_summary_model, max_tokens=None)
        return PromptSummaryBackend(
            client,
            ProviderFactory.model_for(name, settings),
            instruction_template=load_prompt_template("summary_system"),
        )
