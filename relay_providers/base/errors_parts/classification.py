"""
Mapping of arbitrary exceptions onto ``ErrorCode``.

Three entry points:
- ``code_for_status``: the HTTP status table ``APIError`` derives its code from.
- ``code_for_transport``: ``httpx`` / timeout / cancellation failures.
- ``classify_exception``: anything else, e.g. an exception raised by user
  tool code, using structure first and message keywords last.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional, Tuple

import httpx

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError

STATUS_CODES: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,
}

# First match wins.
MESSAGE_KEYWORDS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.RATE_LIMIT, ("rate limit", "rate-limit", "too many requests")),
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden")),
    (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "overloaded", "offline")),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
)

_TRANSPORT_TYPES = (CancelledError, httpx.TransportError, TimeoutError, asyncio.TimeoutError)


def _status_of(exc: BaseException) -> Optional[int]:
    """Find an HTTP status on ``exc`` itself or on its ``response``."""
    holders = (exc, getattr(exc, "response", None))
    for holder in holders:
        if holder is None:
            continue
        for attr in ("status_code", "status"):
            value = getattr(holder, attr, None)
            if isinstance(value, int) and 100 <= value < 600:
                return value
    return None


def code_for_status(status: Optional[int]) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode`.

    Unlisted 5xx statuses are server errors, unlisted 4xx statuses are
    validation errors and anything else is ``UNKNOWN``.
    """
    if status is None:
        return ErrorCode.UNKNOWN
    code = STATUS_CODES.get(status)
    if code is not None:
        return code
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


def code_for_transport(exc: BaseException) -> ErrorCode:
    """Timeouts become ``TIMEOUT``, cancellation ``CANCELLED``, the rest ``TRANSIENT``."""
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (httpx.TimeoutException, TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    return ErrorCode.TRANSIENT


def _code_from_message(text: str) -> ErrorCode:
    lowered = text.lower()
    for code, keywords in MESSAGE_KEYWORDS:
        if any(word in lowered for word in keywords):
            return code
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Best-effort :class:`ErrorCode` for ``exc``.

    A ``ProviderError`` keeps its own code; transport failures and objects
    carrying an HTTP status use the tables above; anything else falls back
    to keywords in its message, then ``UNKNOWN``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, _TRANSPORT_TYPES):
        return code_for_transport(exc)
    status = _status_of(exc)
    if status is not None:
        return code_for_status(status)
    return _code_from_message(str(exc))


__all__ = [
    "STATUS_CODES",
    "MESSAGE_KEYWORDS",
    "classify_exception",
    "code_for_status",
    "code_for_transport",
]
