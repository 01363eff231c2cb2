"""OpenAIProvider adapter.

Speaks the ``/chat/completions`` API over raw HTTP (no vendor SDK):
``Authorization: Bearer`` auth, ``response_format`` structured output with
the make-all-required schema rewrite, and ``data:``/``[DONE]`` streaming.

Construction resolves the API key from the ``api_key`` argument, an
``AdapterParams`` value, or ``OPENAI_API_KEY`` (see ``relay_providers.config``);
a missing key raises ``ConfigurationError`` immediately.

Importing this module registers the adapter under ``"openai"``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.adapter_parts import BaseHTTPAdapter, resolve_adapter_settings
from ..base.dto import AdapterParams
from ..base.http import ErrorDetails
from ..base.models import ChatRequest, ChatResponse
from ..base.registry import register
from .helpers import build_payload, convert_response, parse_error_envelope
from .stream_helpers import OpenAIStreamNormalizer

PROVIDER_NAME = "openai"


class OpenAIProvider(BaseHTTPAdapter):
    """Adapter for OpenAI-compatible chat completions endpoints.

    ``base_url`` may point at any compatible gateway; the adapter appends
    ``/chat/completions``.
    """

    normalizer_class = OpenAIStreamNormalizer

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        model: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        params: Optional[AdapterParams] = None,
    ) -> None:
        settings = resolve_adapter_settings(
            PROVIDER_NAME, api_key=api_key, base_url=base_url, model=model, params=params
        )
        super().__init__(settings, http_client=http_client)

    def _endpoint(self, model: str, *, stream: bool) -> str:
        return f"{self.base_url}/chat/completions"

    def _auth_headers(self, request: ChatRequest) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._settings.api_key}"}

    def _build_payload(self, request: ChatRequest, *, stream: bool) -> Dict[str, Any]:
        return build_payload(request, stream=stream)

    def _convert_response(self, data: Dict[str, Any], model: str) -> ChatResponse:
        return convert_response(data)

    @staticmethod
    def _parse_error_envelope(data: Any) -> Optional[ErrorDetails]:
        return parse_error_envelope(data)


register(PROVIDER_NAME, OpenAIProvider)

__all__ = ["OpenAIProvider", "PROVIDER_NAME"]
