import base64

import httpx
import openai

from docintel.providers.client_base import BaseProviderClient
from docintel.providers.models import ErrorKind, ProviderRequest, ProviderResponse


class OpenAIClientAdapter(BaseProviderClient):
    """Provider client built on the OpenAI-compatible chat completions API.

    Also serves Gemini, OpenRouter, Groq and other backends that expose the
    same API under a different base URL.
    """

    def __init__(
        self,
        *,
        provider_id: str,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        temperature: float = 0.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.provider_id = provider_id
        self._api_key = api_key
        self._temperature = temperature
        self._client = openai.AsyncOpenAI(
            api_key=api_key or "unset",
            timeout=timeout_seconds,
            base_url=base_url,
            http_client=http_client,
        )

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def call(self, model_id: str, request: ProviderRequest) -> ProviderResponse:
        if not self.is_available():
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_UNAVAILABLE,
                f"{self.provider_id} API key is not configured",
            )
        kwargs: dict[str, object] = {}
        if request.max_tokens is not None:
            kwargs["max_tokens"] = request.max_tokens
        try:
            response = await self._client.chat.completions.create(
                model=model_id,
                temperature=self._temperature,
                messages=self._build_messages(request),  # type: ignore[arg-type]
                **kwargs,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_CALL_FAILED,
                f"{self.provider_id} network error: {exc}",
            )
        except openai.APIError as exc:
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_CALL_FAILED,
                f"{self.provider_id} API error: {exc}",
            )

        if not response.choices:
            return ProviderResponse.failure(
                ErrorKind.EMPTY_EXTRACTION, f"{self.provider_id} returned no choices"
            )
        content = response.choices[0].message.content
        if not content:
            return ProviderResponse.failure(
                ErrorKind.EMPTY_EXTRACTION, f"{self.provider_id} returned empty response"
            )
        return ProviderResponse(output=content)

    @staticmethod
    def _build_messages(request: ProviderRequest) -> list[dict[str, object]]:
        messages: list[dict[str, object]] = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        if request.document is None:
            messages.append({"role": "user", "content": request.prompt})
            return messages

        encoded = base64.b64encode(request.document).decode("ascii")
        data_url = f"data:{request.mime_type};base64,{encoded}"
        if request.mime_type == "application/pdf":
            document_part: dict[str, object] = {
                "type": "file",
                "file": {"filename": request.file_name or "document.pdf", "file_data": data_url},
            }
        else:
            document_part = {"type": "image_url", "image_url": {"url": data_url}}
        messages.append({
            "role": "user",
            "content": [document_part, {"type": "text", "text": request.prompt}],
        })
        return messages
