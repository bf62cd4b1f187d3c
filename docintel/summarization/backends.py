"""Summary backends the summarizer cascades over.

Every backend exposes `summarize(text, length) -> Outcome[str]` whatever
its provider expects: a fetchable URL, raw text, or a chat prompt.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

from docintel.cascade.cascade import Outcome, SoftFailure, Success
from docintel.logging.logger import Log
from docintel.parsing.json_extractor import extract_json_object
from docintel.providers.client_base import BaseProviderClient
from docintel.providers.models import ErrorKind, ProviderRequest
from docintel.summarization.text_store import TemporaryTextStore

SUMMARY_LENGTHS = ("short", "medium", "long")
OUTPUT_TEXT_KEYS = ("summary", "summary_text", "generated_text", "text")


class BaseSummaryBackend(ABC):
    def __init__(self, client: BaseProviderClient, model_id: str) -> None:
        self._client = client
        self._model_id = model_id

    @property
    def provider_id(self) -> str:
        return self._client.provider_id

    async def summarize(self, text: str, length: str = "medium") -> Outcome[str]:
        if length not in SUMMARY_LENGTHS:
            raise ValueError(f"Unknown summary length '{length}'. Choose from: {SUMMARY_LENGTHS}")
        request = self._build_request(text, length)
        try:
            response = await self._client.call(self._model_id, request)
        finally:
            self._release(request)
        if not response.ok:
            return SoftFailure(
                response.error_kind or ErrorKind.PROVIDER_CALL_FAILED,
                response.error or "",
            )
        summary = summary_text(response.output)
        Log.debug(f"{self.provider_id} summary output: {summary!r}")
        if not summary:
            return SoftFailure(ErrorKind.EMPTY_EXTRACTION, f"{self.provider_id} returned no summary")
        return Success(summary)

    @abstractmethod
    def _build_request(self, text: str, length: str) -> ProviderRequest:
        raise NotImplementedError

    def _release(self, request: ProviderRequest) -> None:
        """Free whatever _build_request set aside once the call returned."""


class UrlSummaryBackend(BaseSummaryBackend):
    """Summarizers that fetch the text themselves (ApyHub summarize-url)."""

    def __init__(
        self,
        client: BaseProviderClient,
        model_id: str,
        *,
        text_store: TemporaryTextStore,
        output_language: str = "en",
    ) -> None:
        super().__init__(client, model_id)
        self._text_store = text_store
        self._output_language = output_language

    def _build_request(self, text: str, length: str) -> ProviderRequest:
        url = self._text_store.put(text, prefix=self.provider_id)
        Log.debug(f"Temporary text for {self.provider_id} stored at {url}")
        return ProviderRequest(
            options={
                "url": url,
                "summary_length": length,
                "output_language": self._output_language,
            }
        )

    def _release(self, request: ProviderRequest) -> None:
        self._text_store.release(str(request.options["url"]))


class PromptSummaryBackend(BaseSummaryBackend):
    """Chat or text models that receive the text in the request itself."""

    LENGTH_HINTS: ClassVar[dict[str, str]] = {
        "short": "2-3 sentences",
        "medium": "4-6 sentences",
        "long": "8-10 sentences",
    }

    def __init__(
        self,
        client: BaseProviderClient,
        model_id: str,
        *,
        instruction_template: str = "",
        max_tokens: int | None = 500,
    ) -> None:
        super().__init__(client, model_id)
        self._instruction_template = instruction_template
        self._max_tokens = max_tokens

    def _build_request(self, text: str, length: str) -> ProviderRequest:
        system_prompt = ""
        if self._instruction_template:
            system_prompt = self._instruction_template.format(
                length_hint=self.LENGTH_HINTS[length]
            )
        return ProviderRequest(
            prompt=text,
            system_prompt=system_prompt,
            max_tokens=self._max_tokens,
        )


def summary_text(output: object) -> str:
    """Pull summary text out of the shapes providers return."""
    if isinstance(output, list):
        output = output[0] if output else None
    if isinstance(output, dict):
        for key in OUTPUT_TEXT_KEYS:
            value = output.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return ""
    if not isinstance(output, str):
        return ""
    parsed = extract_json_object(output)
    if parsed is not None and isinstance(parsed.get("summary"), str):
        return str(parsed["summary"]).strip()
    return output.strip()
