"""Example provider client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseProviderClient and register the provider in ProviderFactory.
"""

import json
from typing import ClassVar

from docintel.providers.client_base import BaseProviderClient
from docintel.providers.models import ProviderRequest, ProviderResponse


class ExampleClientAdapter(BaseProviderClient):
    """Example adapter that answers without any network call.

    Document requests get a fixed extraction JSON; text requests get the
    first sentence-sized slice of the prompt back as a summary. Useful for
    local development, tests, and as a template for real adapters.
    """

    provider_id = "example"

    DEFAULT_EXTRACTION: ClassVar[dict[str, object]] = {
        "doc_type": "other",
        "issuer": None,
        "invoice_date": None,
        "amount_due": None,
        "raw_text_snippet": "Example document text extracted without a provider.",
    }
    ECHO_CHARS: ClassVar[int] = 280

    def is_available(self) -> bool:
        return True

    async def call(self, model_id: str, request: ProviderRequest) -> ProviderResponse:
        _ = model_id
        if request.document is not None:
            return ProviderResponse(output=json.dumps(self.DEFAULT_EXTRACTION))
        return ProviderResponse(output=request.prompt.strip()[: self.ECHO_CHARS])
