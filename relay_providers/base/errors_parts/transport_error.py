"""
Transport error type.

One normalized shape for every network-layer failure (connect, DNS, TLS,
timeouts, cancellation, broken streams). The ``phase`` attribute records
where the failure happened:

``request``
    Sending the request or waiting for response headers.
``response``
    Reading a non-streaming response body.
``stream``
    Reading the next SSE line of a streaming body.
"""
from __future__ import annotations

from typing import Optional

from .classification import code_for_transport
from .error_code import ErrorCode
from .provider_error import ProviderError

PHASES = ("request", "response", "stream")


class TransportError(ProviderError):
    """Connection, timeout or cancellation failure with phase context."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        phase: str,
        model: Optional[str] = None,
        code: ErrorCode = ErrorCode.TRANSIENT,
        raw: Optional[BaseException] = None,
    ) -> None:
        if phase not in PHASES:
            raise ValueError(f"unknown transport phase: {phase!r}")
        self.phase = phase
        super().__init__(
            code=code,
            message=message,
            provider=provider,
            model=model,
            retryable=code.retryable,
            raw=raw,
        )

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        provider: str,
        phase: str,
        model: Optional[str] = None,
    ) -> "TransportError":
        """Wrap ``exc`` (an ``httpx`` error, timeout or ``CancelledError``)."""
        code = code_for_transport(exc)
        detail = str(exc) or type(exc).__name__
        return cls(f"{phase} failed: {detail}", provider=provider, phase=phase, model=model, code=code, raw=exc)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{super().__str__()} (phase={self.phase})"


__all__ = ["TransportError", "PHASES"]
