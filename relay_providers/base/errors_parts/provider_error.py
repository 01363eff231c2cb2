"""
Root exception of the client's error taxonomy.

Adapters, streaming normalizers and the registry raise (or park on a stream)
a ``ProviderError`` or one of its subclasses, so callers branch on ``code``
instead of on vendor-specific exception types.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Failure carrying a normalized :class:`ErrorCode`.

    Attributes:
        code: Failure category.
        message: Human-readable description, safe to log (never holds keys).
        provider: Registry name of the adapter that failed.
        model: Model the request targeted, when known.
        retryable: Hint for callers running their own retry policy; the
            client itself never retries.
        raw: Underlying exception, when one was wrapped.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def log_fields(self) -> Dict[str, Any]:
        """Fields merged into ``*.error`` log lines."""
        return {
            "error_code": self.code.value,
            "error": self.message,
            "retryable": self.retryable,
        }

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
