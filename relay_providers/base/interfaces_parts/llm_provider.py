"""LLMProvider Protocol (single-class module).

Defines the minimal call contract for vendor wire adapters.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatRequest, ChatResponse


@runtime_checkable
class LLMProvider(Protocol):
    """Minimal interface for Large Language Model providers.

    Implementations map ``ChatRequest`` fields to their vendor's JSON body,
    normalize responses to ``ChatResponse`` and never leak vendor payloads
    upstream.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"`` or ``"anthropic"``."""
        ...

    def call(self, request: ChatRequest, *, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Execute a single non-streaming request.

        Failure handling: raise a ``ProviderError`` subclass; no partial
        response is returned on failure.
        """
        ...
