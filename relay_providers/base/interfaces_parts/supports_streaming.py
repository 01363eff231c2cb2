"""SupportsStreaming Protocol (single-class module).

Capability marker for providers that can stream incremental chunks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatRequest

if TYPE_CHECKING:
    from ..streaming.stream import ResponseStream


@runtime_checkable
class SupportsStreaming(Protocol):
    """Capability marker for providers that can stream incremental chunks.

    ``call_stream`` returns once response headers arrived; the body is read
    lazily as the caller pulls chunks.
    """

    def call_stream(
        self, request: ChatRequest, *, token: Optional[CancellationToken] = None
    ) -> "ResponseStream":  # pragma: no cover - interface
        ...
