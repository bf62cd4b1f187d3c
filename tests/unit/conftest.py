from collections.abc import Callable
from typing import Any

import pytest

from docintel.providers.client_base import BaseProviderClient
from docintel.providers.models import ErrorKind, ProviderRequest, ProviderResponse


class ScriptedClient(BaseProviderClient):
    """Provider client that replays queued replies and records every request."""

    def __init__(
        self,
        provider_id: str,
        replies: list[Any] | None = None,
        *,
        available: bool = True,
        default: Callable[[ProviderRequest], ProviderResponse] | None = None,
    ) -> None:
        self.provider_id = provider_id
        self._replies = list(replies or [])
        self._available = available
        self._default = default
        self.calls: list[tuple[str, ProviderRequest]] = []

    def is_available(self) -> bool:
        return self._available

    async def call(self, model_id: str, request: ProviderRequest) -> ProviderResponse:
        self.calls.append((model_id, request))
        if self._replies:
            reply = self._replies.pop(0)
        elif self._default is not None:
            return self._default(request)
        else:
            return ProviderResponse.failure(ErrorKind.PROVIDER_CALL_FAILED, "no reply queued")
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, ProviderResponse):
            return reply
        return ProviderResponse(output=reply)


@pytest.fixture()
def make_client() -> Callable[..., ScriptedClient]:
    return ScriptedClient

