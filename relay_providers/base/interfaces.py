"""Provider interfaces public surface.

``LLMProvider`` is the polymorphic contract every vendor adapter satisfies;
``SupportsStreaming`` marks streaming capability and ``StreamSource`` is the
pull contract of a stream. Adding a vendor means adding one class that
satisfies these protocols and registering it; calling code never changes.
"""

from .interfaces_parts.llm_provider import LLMProvider
from .interfaces_parts.supports_streaming import SupportsStreaming
from .interfaces_parts.stream_source import StreamSource

__all__ = ["LLMProvider", "SupportsStreaming", "StreamSource"]
