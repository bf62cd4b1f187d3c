import base64

import httpx

from docintel.providers.client_base import BaseProviderClient
from docintel.providers.models import ErrorKind, ProviderRequest, ProviderResponse


class BytezClientAdapter(BaseProviderClient):
    """Provider client for the Bytez hosted model API.

    Every model answers `POST {base_url}/{model_id}` with `{"error", "output"}`;
    the output shape depends on the model (string, list or object).
    """

    provider_id = "bytez"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout_seconds: int,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def call(self, model_id: str, request: ProviderRequest) -> ProviderResponse:
        if not self.is_available():
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_UNAVAILABLE, "Bytez API key is not configured"
            )
        try:
            response = await self._http.post(
                f"{self._base_url}/{model_id}",
                headers={"Authorization": f"Key {self._api_key}"},
                json=self._build_payload(request),
            )
        except httpx.HTTPError as exc:
            return ProviderResponse.failure(
                ErrorKind.PROVIDER_CALL_FAILED, f"Bytez network error: {exc}"
            )

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"output": body}

        error = body.get("error")
        if response.is_error or error:
            message = _error_message(error) or f"Bytez API error: {response.status_code}"
            return ProviderResponse.failure(ErrorKind.PROVIDER_CALL_FAILED, message)

        output = body.get("output")
        if output is None or output == "" or output == [] or output == {}:
            return ProviderResponse.failure(
                ErrorKind.EMPTY_EXTRACTION, "No output received from Bytez API"
            )
        return ProviderResponse(output=output)

    @staticmethod
    def _build_payload(request: ProviderRequest) -> dict[str, object]:
        payload: dict[str, object] = {}
        if request.prompt:
            payload["text"] = request.prompt
        if request.document is not None and request.mime_type.startswith("image/"):
            encoded = base64.b64encode(request.document).decode("ascii")
            payload["base64"] = f"data:{request.mime_type};base64,{encoded}"
        if request.options:
            payload["params"] = dict(request.options)
        return payload


def _error_message(error: object) -> str:
    if not error:
        return ""
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)
