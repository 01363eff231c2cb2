"""Cancellation error type.

``CancelledError`` is what a token raises when polled after ``cancel``. The
transport and streaming layers never let it escape on its own: they wrap it
in a ``TransportError`` with code ``cancelled`` tagged with the phase that
observed it.
"""

from __future__ import annotations

from typing import Optional

DEFAULT_REASON = "operation cancelled"


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancelled token.

    ``reason`` keeps the caller-supplied text (``None`` when ``cancel`` was
    called without one); the exception message falls back to a generic text.
    """

    def __init__(self, reason: Optional[str] = None) -> None:
        super().__init__(reason or DEFAULT_REASON)
        self.reason = reason


__all__ = ["CancelledError", "DEFAULT_REASON"]
