from abc import ABC, abstractmethod

from docintel.providers.models import ProviderRequest, ProviderResponse


class BaseProviderClient(ABC):
    """Contract for every external extraction/summarization/generation backend."""

    provider_id: str = ""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True when the client has the credentials it needs."""

    @abstractmethod
    async def call(self, model_id: str, request: ProviderRequest) -> ProviderResponse:
        """Run one request against the backend.

        Provider-side failures (missing credentials, network errors, non-success
        responses, empty output) are returned as ProviderResponse errors and
        never raised.
        """
