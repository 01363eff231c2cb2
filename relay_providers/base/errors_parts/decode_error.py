"""
Decode error type for malformed JSON bodies and SSE events.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError

# Raised when a well-formed JSON payload does not have the expected structure.
SHAPE_ERRORS = (AttributeError, TypeError, LookupError, ValueError)


class DecodeError(ProviderError):
    """A vendor payload could not be decoded as JSON.

    ``body`` keeps the offending text (a whole response body or the data of a
    single SSE event).
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        body: Optional[str] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        self.body = body
        super().__init__(code=ErrorCode.DECODE, message=message, provider=provider, model=model, raw=raw)


__all__ = ["DecodeError", "SHAPE_ERRORS"]
