"""BaseHTTPAdapter: shared request lifecycle for the vendor wire adapters.

Purpose:
- Run the identical non-streaming and streaming flows for every vendor:
  validate the request, build the vendor payload, POST it on a pooled (or
  injected) ``httpx.Client``, map the result back to the canonical model and
  emit normalized ``chat.*`` log events.
- Vendor subclasses supply only translation hooks (endpoint, headers,
  payload, response conversion, error envelope) and the streaming normalizer
  class.

External dependencies:
- ``httpx`` through ``relay_providers.base.http``.

Failure modes:
- ``ConfigurationError`` for an empty model, raised before any I/O.
- ``TransportError``, ``APIError`` and ``DecodeError`` from the transport
  helpers, logged as ``chat.error`` and re-raised unchanged. No retries.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping, Optional, Type

import httpx

from ..cancellation import CancellationToken
from ..errors import SHAPE_ERRORS, DecodeError, ProviderError
from ..http import ErrorDetails, get_httpx_client, open_stream, post_json
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatRequest, ChatResponse
from ..streaming import BaseStreamNormalizer, ResponseStream
from ..utils.messages import require_model
from .adapter_settings import AdapterSettings


class BaseHTTPAdapter:
    """Reusable base class for raw-HTTP vendor adapters.

    Subclasses must set ``normalizer_class`` and implement ``_endpoint``,
    ``_auth_headers``, ``_build_payload``, ``_convert_response`` and
    ``_parse_error_envelope``. ``_query_params`` is optional.
    """

    normalizer_class: Type[BaseStreamNormalizer] = BaseStreamNormalizer

    def __init__(self, settings: AdapterSettings, *, http_client: Optional[httpx.Client] = None) -> None:
        self._settings = settings
        self._client = http_client or get_httpx_client(None, settings.provider)
        self._logger = get_logger(f"relay.{settings.provider}")

    @property
    def provider_name(self) -> str:
        return self._settings.provider

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    def default_model(self) -> Optional[str]:
        """Return the configured default model for building requests."""
        return self._settings.model

    # ----- Non-streaming -----

    def call(self, request: ChatRequest, *, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Execute one request and return the canonical response."""
        model = require_model(request, self.provider_name)
        ctx = LogContext(provider=self.provider_name, model=model).bind(operation="chat")
        payload = self._build_payload(request, stream=False)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            has_tools=bool(request.tools),
            has_schema=request.json_schema is not None,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )
        t0 = time.perf_counter()
        try:
            data = post_json(
                self._client,
                self._endpoint(model, stream=False),
                payload=payload,
                headers=self._headers(request),
                provider=self.provider_name,
                model=model,
                parse_envelope=self._parse_error_envelope,
                token=token,
                params=self._query_params(stream=False),
            )
            if not isinstance(data, dict):
                raise DecodeError(
                    f"expected a JSON object, got {type(data).__name__}",
                    provider=self.provider_name,
                    model=model,
                    body=str(data),
                )
            try:
                response = self._convert_response(data, model)
            except SHAPE_ERRORS as exc:
                raise DecodeError(
                    f"unexpected response shape: {exc}",
                    provider=self.provider_name,
                    model=model,
                    body=str(data),
                    raw=exc,
                ) from exc
        except ProviderError as exc:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                **exc.log_fields(),
            )
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            tokens=response.usage,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            finish_reason=response.finish_reason.value,
            tool_calls=len(response.tool_calls),
        )
        return response

    # ----- Streaming -----

    def call_stream(self, request: ChatRequest, *, token: Optional[CancellationToken] = None) -> ResponseStream:
        """Open a streaming request and return the pull facade.

        Returns once response headers arrived; chunks are read lazily.
        """
        model = require_model(request, self.provider_name)
        ctx = LogContext(provider=self.provider_name, model=model).bind(operation="stream")
        payload = self._build_payload(request, stream=True)
        try:
            response = open_stream(
                self._client,
                self._endpoint(model, stream=True),
                payload=payload,
                headers=self._headers(request),
                provider=self.provider_name,
                model=model,
                parse_envelope=self._parse_error_envelope,
                token=token,
                params=self._query_params(stream=True),
            )
        except ProviderError as exc:
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="start",
                **exc.log_fields(),
            )
            raise
        normalizer = self.normalizer_class(
            response,
            provider=self.provider_name,
            model=model,
            token=token,
            logger=self._logger,
        )
        return ResponseStream(normalizer, token=token)

    # ----- Vendor hooks -----

    def _headers(self, request: ChatRequest) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self._auth_headers(request))
        headers.update(self._settings.headers)
        return headers

    def _query_params(self, *, stream: bool) -> Optional[Mapping[str, str]]:
        return None

    def _endpoint(self, model: str, *, stream: bool) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def _auth_headers(self, request: ChatRequest) -> Dict[str, str]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _build_payload(self, request: ChatRequest, *, stream: bool) -> Dict[str, Any]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _convert_response(self, data: Dict[str, Any], model: str) -> ChatResponse:  # pragma: no cover - abstract
        raise NotImplementedError

    @staticmethod
    def _parse_error_envelope(data: Any) -> Optional[ErrorDetails]:  # pragma: no cover - abstract
        raise NotImplementedError


__all__ = ["BaseHTTPAdapter"]
