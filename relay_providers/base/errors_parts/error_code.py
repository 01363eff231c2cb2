"""
Error taxonomy shared by every layer of the client.

``ErrorCode`` values are lowercase snake_case strings and appear verbatim as
the ``error_code`` field of ``chat.error`` / ``stream.error`` log lines, so
they are part of the public contract. ``configuration`` covers missing keys
and models detected before any I/O; ``decode`` covers bodies or stream
events that are not valid JSON.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Failure category attached to every ``ProviderError``."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    CONFIGURATION = "configuration"
    DECODE = "decode"
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        """Whether a caller-side retry of the same request may succeed."""
        return self in _RETRYABLE


_RETRYABLE = frozenset(
    {
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.TRANSIENT,
        ErrorCode.SERVER_ERROR,
        ErrorCode.UNAVAILABLE,
    }
)


__all__ = ["ErrorCode"]
