"""StreamSource Protocol (single-class module).

The pull contract every streaming normalizer implements and the
``ResponseStream`` facade wraps.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..errors import ProviderError
from ..models import ChatResponse, StreamChunk


@runtime_checkable
class StreamSource(Protocol):
    """Explicit pull iterator over one streamed response.

    ``next`` blocks on at most one network read and returns False at
    end-of-stream or after an error; ``err`` then reports the error (or
    ``None``). ``close`` releases the body and is idempotent.
    """

    def next(self) -> bool:
        ...

    def current(self) -> StreamChunk:
        ...

    def err(self) -> Optional[ProviderError]:
        ...

    def close(self) -> None:
        ...

    def response(self) -> ChatResponse:
        ...


__all__ = ["StreamSource"]
