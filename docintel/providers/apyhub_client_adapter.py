import httpx

from docintel.providers.client_base import BaseProviderClient
from docintel.providers.models import ErrorKind, ProviderRequest, ProviderResponse


class ApyHubClientAdapter(BaseProviderClient):
    """Provider client for the ApyHub AI endpoints (`/ai/summarize-url`).

    The URL to summarize travels in `request.options["url"]`; summary length
    and output language are read from the same options.
    """

    provider_id = "apyhub"

    def __init__(
        self,
        *,
        token: str,
        base_url: str,
        timeout_seconds: int,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    def is_available(self) -> bool:
        return bool(self._token)

    async def call(self, model_id: str, request: ProviderRequest) -> ProviderResponse:
        if not self.is_available():
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_UNAVAILABLE,
                "ApyHub API token is not configured",
            )
        url = request.options.get("url")
        if not url:
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_CALL_FAILED, "ApyHub request is missing a url"
            )
        body = {
            "url": url,
            "summary_length": request.options.get("summary_length", "medium"),
            "output_language": request.options.get("output_language", "en"),
        }
        try:
            response = await self._http.post(
                f"{self._base_url}/ai/{model_id}",
                headers={"apy-token": self._token, "Content-Type": "application/json"},
                json=body,
            )
        except httpx.HTTPError as exc:
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_CALL_FAILED, f"ApyHub network error: {exc}"
            )

        if response.is_error:
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_CALL_FAILED, _error_message(response)
            )

        try:
            data = response.json()
        except ValueError:
            return ProviderResponse.failure(
                ErrorKind.PARSE_ERROR, "ApyHub returned a non-JSON response"
            )
        summary = ""
        if isinstance(data, dict):
            nested = data.get("data")
            if isinstance(nested, dict):
                summary = nested.get("summary") or ""
            summary = summary or data.get("summary") or ""
        if not summary:
            return ProviderResponse.failure(
                ErrorKind.EMPTY_EXTRACTION, "No summary content received from ApyHub API"
            )
        return ProviderResponse(output=summary)


def _error_message(response: httpx.Response) -> str:
    fallback = f"ApyHub API error: {response.status_code} {response.reason_phrase}"
    try:
        payload = response.json()
    except ValueError:
        return response.text or fallback
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error")
        if isinstance(message, dict):
            message = message.get("message")
        if message:
            return str(message)
    return fallback
