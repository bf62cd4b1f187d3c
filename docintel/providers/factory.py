from typing import ClassVar

import httpx

from docintel.config.settings import Settings
from docintel.providers.apyhub_client_adapter import ApyHubClientAdapter
from docintel.providers.bytez_client_adapter import BytezClientAdapter
from docintel.providers.client_base import BaseProviderClient
from docintel.providers.example_client_adapter import ExampleClientAdapter
from docintel.providers.openai_client_adapter import OpenAIClientAdapter


class ProviderFactory:
    """Creates configured provider clients by name."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(
        cls,
        name: str,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> BaseProviderClient:
        """Create one of the named document/summary backends.

        Adapters share http_client when one is given; its owner closes it.
        """
        provider = name.lower()
        timeout = settings.provider_timeout_seconds
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "bytez":
            return BytezClientAdapter(
                api_key=settings.bytez_api_key,
                base_url=settings.bytez_base_url,
                timeout_seconds=timeout,
                http_client=http_client,
            )
        if provider == "apyhub":
            return ApyHubClientAdapter(
                token=settings.apyhub_token,
                base_url=settings.apyhub_base_url,
                timeout_seconds=timeout,
                http_client=http_client,
            )
        if provider == "openai":
            return OpenAIClientAdapter(
                provider_id="openai",
                api_key=settings.openai_api_key,
                timeout_seconds=timeout,
                base_url=settings.openai_base_url or None,
                http_client=http_client,
            )
        if provider == "gemini":
            return OpenAIClientAdapter(
                provider_id="gemini",
                api_key=settings.gemini_api_key,
                timeout_seconds=timeout,
                base_url=settings.gemini_base_url or cls.OPENAI_COMPATIBLE_BASE_URLS["gemini"],
                http_client=http_client,
            )
        if provider == "llm":
            return cls.create_llm(settings, http_client)
        raise ValueError(
            f"Unknown provider '{provider}'. Choose from: "
            f"{['apyhub', 'bytez', 'example', 'gemini', 'llm', 'openai']}"
        )

    @classmethod
    def create_llm(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> BaseProviderClient:
        """Create the general-purpose reasoning LLM client."""
        provider = settings.llm_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            provider_id=f"llm:{provider}",
            api_key=cls._resolve_llm_api_key(provider, settings),
            timeout_seconds=settings.provider_timeout_seconds,
            base_url=cls._resolve_llm_base_url(provider, settings),
            temperature=max(0.0, min(1.0, settings.llm_temperature)),
            http_client=http_client,
        )

    @classmethod
    def model_for(cls, name: str, settings: Settings) -> str:
        """Model identifier a named provider is called with."""
        models = {
            "openai": settings.openai_model_name,
            "gemini": settings.gemini_model_name,
            "bytez": settings.bytez_document_model,
            "apyhub": "summarize-url",
            "llm": settings.llm_model_name,
            "example": "example",
        }
        return models.get(name.lower(), "")

    @classmethod
    def _resolve_llm_base_url(cls, provider: str, settings: Settings) -> str | None:
        custom = settings.llm_base_url.strip()
        if provider == "openai":
            return custom or None
        if provider == "openai_compatible":
            if not custom:
                raise ValueError(
                    "llm_base_url is required for llm_provider=openai_compatible"
                )
            return custom
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return custom or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_llm_api_key(cls, provider: str, settings: Settings) -> str:
        if settings.llm_api_key:
            return settings.llm_api_key
        if provider == "openai":
            return settings.openai_api_key
        if provider == "gemini":
            return settings.gemini_api_key
        if provider == "ollama":
            return "ollama"
        return ""
