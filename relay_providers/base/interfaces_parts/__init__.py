"""Protocol definitions (one class per module).

Prefer importing from ``relay_providers.base.interfaces``.
"""

from .llm_provider import LLMProvider
from .supports_streaming import SupportsStreaming
from .stream_source import StreamSource

__all__ = ["LLMProvider", "SupportsStreaming", "StreamSource"]
