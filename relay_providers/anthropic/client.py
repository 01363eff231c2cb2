"""AnthropicProvider adapter.

Speaks the Messages API (``POST /v1/messages``) over raw HTTP. Requests carry
``x-api-key`` and ``anthropic-version``; structured-output requests add the
``anthropic-beta`` header that enables ``output_format``. Streaming uses the
typed ``event:``/``data:`` framing handled by ``AnthropicStreamNormalizer``.

Configuration keys honoured besides the common ones: ``api_version`` and
``max_tokens`` (the default used when a request leaves it unset). Both can
be supplied through the config file or ``AdapterParams.extra``.

Importing this module registers the adapter under ``"anthropic"``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.adapter_parts import BaseHTTPAdapter, resolve_adapter_settings
from ..base.dto import AdapterParams
from ..base.http import ErrorDetails
from ..base.models import ChatRequest, ChatResponse
from ..base.registry import register
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_STRUCTURED_OUTPUTS_BETA,
)
from .helpers import build_payload, convert_response, parse_error_envelope
from .stream_helpers import AnthropicStreamNormalizer

PROVIDER_NAME = "anthropic"


class AnthropicProvider(BaseHTTPAdapter):
    """Adapter for the Anthropic Messages API."""

    normalizer_class = AnthropicStreamNormalizer

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
        self._api_version = str(settings.extra.get("api_version") or ANTHROPIC_API_VERSION)
        self._default_max_tokens = int(settings.extra.get("max_tokens") or ANTHROPIC_DEFAULT_MAX_TOKENS)

    def _endpoint(self, model: str, *, stream: bool) -> str:
        return f"{self.base_url}/v1/messages"

    def _auth_headers(self, request: ChatRequest) -> Dict[str, str]:
        headers = {
            "x-api-key": self._settings.api_key,
            "anthropic-version": self._api_version,
        }
        if request.json_schema is not None:
            headers["anthropic-beta"] = ANTHROPIC_STRUCTURED_OUTPUTS_BETA
        return headers

    def _build_payload(self, request: ChatRequest, *, stream: bool) -> Dict[str, Any]:
        return build_payload(request, stream=stream, default_max_tokens=self._default_max_tokens)

    def _convert_response(self, data: Dict[str, Any], model: str) -> ChatResponse:
        return convert_response(data)

    @staticmethod
    def _parse_error_envelope(data: Any) -> Optional[ErrorDetails]:
        return parse_error_envelope(data)


register(PROVIDER_NAME, AnthropicProvider)

__all__ = ["AnthropicProvider", "PROVIDER_NAME"]
