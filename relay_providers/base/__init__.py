"""
Relay Base Package

Exports the vendor-neutral pieces every adapter is built from:
- Models: canonical request/response/streaming value types
- Errors: the ``ProviderError`` taxonomy
- Interfaces: the provider and stream contracts
- Registry: the process-wide provider registry
- Streaming: SSE framing, accumulation and the ``ResponseStream`` facade
"""

from .cancellation import CancellationToken, CancelledError
from .dto import AdapterParams
from .errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    ProviderError,
    TransportError,
    UnknownProviderError,
    classify_exception,
)
from .interfaces import LLMProvider, StreamSource, SupportsStreaming
from .models import (
    ChatRequest,
    ChatResponse,
    FinishReason,
    JSONSchemaSpec,
    Message,
    Role,
    StreamChunk,
    ToolCall,
    ToolCallDelta,
    ToolDefinition,
    Usage,
)
from .registry import ProviderRegistry, default_registry, load_plugins
from .streaming import BaseStreamNormalizer, ResponseStream, StreamAccumulator
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "Role",
    "Message",
    "ToolCall",
    "ToolDefinition",
    "JSONSchemaSpec",
    "ChatRequest",
    "ChatResponse",
    "FinishReason",
    "Usage",
    "StreamChunk",
    "ToolCallDelta",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "UnknownProviderError",
    "TransportError",
    "APIError",
    "DecodeError",
    "classify_exception",
    # Interfaces
    "LLMProvider",
    "SupportsStreaming",
    "StreamSource",
    # Registry
    "ProviderRegistry",
    "default_registry",
    "load_plugins",
    # Streaming
    "BaseStreamNormalizer",
    "ResponseStream",
    "StreamAccumulator",
    # Support
    "AdapterParams",
    "CancellationToken",
    "CancelledError",
    "TimeoutConfig",
    "get_timeout_config",
]
