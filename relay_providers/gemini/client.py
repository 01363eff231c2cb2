"""GeminiProvider adapter.

Speaks the Gemini ``generateContent`` REST API over raw HTTP:
``x-goog-api-key`` auth, ``systemInstruction`` / ``generationConfig`` /
``functionDeclarations`` request fields, and ``streamGenerateContent`` with
``alt=sse`` for streaming.

Credentials come from the ``api_key`` argument, ``AdapterParams``,
``GEMINI_API_KEY`` or its alias ``GOOGLE_API_KEY``.

Importing this module registers the adapter under ``"gemini"``.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from ..base.adapter_parts import BaseHTTPAdapter, resolve_adapter_settings
from ..base.dto import AdapterParams
from ..base.http import ErrorDetails
from ..base.models import ChatRequest, ChatResponse
from ..base.registry import register
from .helpers import build_payload, convert_response, parse_error_envelope
from .stream_helpers import GeminiStreamNormalizer

PROVIDER_NAME = "gemini"
API_VERSION_PATH = "v1beta"


def _model_path(model: str) -> str:
    """Accept both ``gemini-2.5-pro`` and ``models/gemini-2.5-pro``."""
    return model[len("models/"):] if model.startswith("models/") else model


class GeminiProvider(BaseHTTPAdapter):
    """Adapter for the Gemini Developer API."""

    normalizer_class = GeminiStreamNormalizer

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
        method = "streamGenerateContent" if stream else "generateContent"
        return f"{self.base_url}/{API_VERSION_PATH}/models/{_model_path(model)}:{method}"

    def _query_params(self, *, stream: bool) -> Optional[Mapping[str, str]]:
        return {"alt": "sse"} if stream else None

    def _auth_headers(self, request: ChatRequest) -> Dict[str, str]:
        return {"x-goog-api-key": self._settings.api_key}

    def _build_payload(self, request: ChatRequest, *, stream: bool) -> Dict[str, Any]:
        return build_payload(request)

    def _convert_response(self, data: Dict[str, Any], model: str) -> ChatResponse:
        return convert_response(data)

    @staticmethod
    def _parse_error_envelope(data: Any) -> Optional[ErrorDetails]:
        return parse_error_envelope(data)


register(PROVIDER_NAME, GeminiProvider)

__all__ = ["GeminiProvider", "PROVIDER_NAME"]
