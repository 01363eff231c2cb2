"""HTTP send/receive helpers shared by every wire adapter.

Purpose:
    Keep the request lifecycle identical across vendors: build a JSON POST,
    send it on the adapter's ``httpx.Client``, honour a ``CancellationToken``,
    turn transport failures into ``TransportError`` and non-success statuses
    into ``APIError`` via a vendor-supplied envelope parser.

Cancellation:
    Responses are always opened with ``stream=True``. While a body is being
    read, a token callback closes the response so a blocked read returns
    promptly; the resulting ``httpx`` error is reported as
    ``TransportError(code=cancelled)``.

Failure modes:
    - ``TransportError`` (phase ``request`` or ``response``).
    - ``APIError`` for non-2xx statuses; message falls back to the raw body
      text when the vendor envelope does not parse.
    - ``DecodeError`` for malformed JSON success bodies.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import APIError, DecodeError, TransportError


@dataclass(frozen=True)
class ErrorDetails:
    """Fields extracted from a vendor error envelope."""

    message: str
    error_type: Optional[str] = None
    error_code: Optional[str] = None


EnvelopeParser = Callable[[Any], Optional[ErrorDetails]]


def decode_json(text: str, *, provider: str, model: Optional[str], context: str) -> Any:
    """Parse ``text`` as JSON or raise :class:`DecodeError`."""
    try:
        return json.loads(text)
    except ValueError as exc:
        raise DecodeError(
            f"invalid JSON in {context}: {exc}",
            provider=provider,
            model=model,
            body=text,
            raw=exc,
        ) from exc


def api_error_from_body(
    status_code: Optional[int],
    body: str,
    *,
    provider: str,
    model: Optional[str],
    parse_envelope: EnvelopeParser,
) -> APIError:
    """Build an :class:`APIError` from a vendor error body."""
    details: Optional[ErrorDetails] = None
    try:
        data = json.loads(body) if body else None
    except ValueError:
        data = None
    if isinstance(data, dict):
        details = parse_envelope(data)
    if details is not None and details.message:
        return APIError(
            details.message,
            provider=provider,
            model=model,
            status_code=status_code,
            error_type=details.error_type,
            error_code=details.error_code,
            body=body,
        )
    fallback = body.strip() or f"HTTP {status_code}"
    return APIError(fallback, provider=provider, model=model, status_code=status_code, body=body)


def transport_error(
    exc: BaseException,
    *,
    token: Optional[CancellationToken],
    provider: str,
    model: Optional[str],
    phase: str,
) -> TransportError:
    """Wrap ``exc``; a cancelled token takes precedence over the raw cause."""
    if token is not None and token.cancelled:
        exc = CancelledError(token.reason)
    return TransportError.from_exception(exc, provider=provider, phase=phase, model=model)


def _send(
    client: httpx.Client,
    request: httpx.Request,
    *,
    token: Optional[CancellationToken],
    provider: str,
    model: Optional[str],
) -> httpx.Response:
    if token is not None and token.cancelled:
        raise transport_error(CancelledError(), token=token, provider=provider, model=model, phase="request")
    try:
        return client.send(request, stream=True)
    except httpx.HTTPError as exc:
        raise transport_error(exc, token=token, provider=provider, model=model, phase="request") from exc


def read_body(
    response: httpx.Response,
    *,
    token: Optional[CancellationToken],
    provider: str,
    model: Optional[str],
) -> str:
    """Read and close a streamed response, returning its text."""
    handle = token.add_callback(response.close) if token is not None else None
    try:
        response.read()
    except (httpx.HTTPError, httpx.StreamError) as exc:
        raise transport_error(exc, token=token, provider=provider, model=model, phase="response") from exc
    finally:
        if handle is not None:
            token.remove_callback(handle)
        response.close()
    if token is not None and token.cancelled:
        raise transport_error(CancelledError(), token=token, provider=provider, model=model, phase="response")
    return response.text


def post_json(
    client: httpx.Client,
    url: str,
    *,
    payload: Mapping[str, Any],
    headers: Mapping[str, str],
    provider: str,
    model: Optional[str],
    parse_envelope: EnvelopeParser,
    token: Optional[CancellationToken] = None,
    params: Optional[Mapping[str, str]] = None,
) -> Any:
    """POST ``payload`` as JSON and return the decoded success body."""
    request = client.build_request("POST", url, json=payload, headers=dict(headers), params=params)
    response = _send(client, request, token=token, provider=provider, model=model)
    body = read_body(response, token=token, provider=provider, model=model)
    if not response.is_success:
        raise api_error_from_body(
            response.status_code, body, provider=provider, model=model, parse_envelope=parse_envelope
        )
    return decode_json(body, provider=provider, model=model, context="response body")


def open_stream(
    client: httpx.Client,
    url: str,
    *,
    payload: Mapping[str, Any],
    headers: Mapping[str, str],
    provider: str,
    model: Optional[str],
    parse_envelope: EnvelopeParser,
    token: Optional[CancellationToken] = None,
    params: Optional[Mapping[str, str]] = None,
) -> httpx.Response:
    """POST ``payload`` and return the open SSE response (body unread).

    The caller owns the returned response and must close it exactly once.
    Non-success statuses are read, closed and raised as :class:`APIError`.
    """
    stream_headers = dict(headers)
    stream_headers.setdefault("Accept", "text/event-stream")
    request = client.build_request("POST", url, json=payload, headers=stream_headers, params=params)
    response = _send(client, request, token=token, provider=provider, model=model)
    if not response.is_success:
        body = read_body(response, token=token, provider=provider, model=model)
        raise api_error_from_body(
            response.status_code, body, provider=provider, model=model, parse_envelope=parse_envelope
        )
    return response


__all__ = [
    "ErrorDetails",
    "EnvelopeParser",
    "decode_json",
    "api_error_from_body",
    "transport_error",
    "read_body",
    "post_json",
    "open_stream",
]
