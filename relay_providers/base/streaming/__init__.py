"""Streaming engine: SSE reader, accumulator, base normalizer and facade.

Vendor packages subclass :class:`BaseStreamNormalizer`; callers only ever see
:class:`ResponseStream`.
"""

from .sse import SSEEvent, iter_sse_events
from .accumulator import StreamAccumulator
from .streaming_metrics import StreamMetrics
from .normalizer import BaseStreamNormalizer
from .stream import ResponseStream

__all__ = [
    "SSEEvent",
    "iter_sse_events",
    "StreamAccumulator",
    "StreamMetrics",
    "BaseStreamNormalizer",
    "ResponseStream",
]
