"""
Vendor API error type.

Represents a non-success HTTP status (or an error event delivered inside a
stream). Each wire adapter parses its vendor's JSON error envelope into the
``error_type``/``error_code``/``message`` triple; when the body is not a
parseable envelope the raw body text becomes the message.
"""
from __future__ import annotations

from typing import Optional

from .classification import code_for_status
from .error_code import ErrorCode
from .provider_error import ProviderError


class APIError(ProviderError):
    """Normalized vendor error.

    Attributes (in addition to :class:`ProviderError`):
        status_code: HTTP status, or ``None`` for in-stream error events.
        error_type: Vendor error type (e.g. ``invalid_request_error``).
        error_code: Vendor error code, stringified.
        body: Raw response body text.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        error_code: Optional[str] = None,
        body: Optional[str] = None,
        code: Optional[ErrorCode] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.error_code = error_code
        self.body = body
        resolved = code if code is not None else code_for_status(status_code)
        super().__init__(
            code=resolved,
            message=message,
            provider=provider,
            model=model,
            retryable=resolved.retryable,
        )

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = self.status_code if self.status_code is not None else "-"
        kind = f" [{self.error_type}]" if self.error_type else ""
        return f"{super().__str__()} (status={status}){kind}"


__all__ = ["APIError"]
