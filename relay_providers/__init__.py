"""relay_providers package

Vendor-agnostic client for large-language-model HTTP APIs.

Purpose:
    Issue one canonical ``ChatRequest`` and receive one canonical
    ``ChatResponse`` or ``ResponseStream`` regardless of which vendor serves
    it. Importing the package registers the built-in adapters (``openai``,
    ``gemini``, ``anthropic``) in the default provider registry.

Public API (re-exported):
    - Version: ``__version__``
    - Canonical model: ``ChatRequest``, ``ChatResponse``, ``Message``, ...
    - Exceptions: the ``ProviderError`` taxonomy and ``ErrorCode``
    - Registry: ``get``, ``register``, ``available``, ``load_plugins``
    - High-level API: the ``llm`` sub-package

Example:
    >>> import relay_providers
    >>> provider = relay_providers.get("openai")  # doctest: +SKIP
"""

from .base import (
    APIError,
    CancellationToken,
    ChatRequest,
    ChatResponse,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    FinishReason,
    JSONSchemaSpec,
    Message,
    ProviderError,
    ProviderRegistry,
    ResponseStream,
    StreamChunk,
    ToolCall,
    ToolCallDelta,
    ToolDefinition,
    TransportError,
    UnknownProviderError,
    Usage,
    default_registry,
    load_plugins,
)
from .base.registry import available, get, register, unregister
from .config import get_provider_config

# Vendor packages register themselves on import.
from .openai import OpenAIProvider
from .gemini import GeminiProvider
from .anthropic import AnthropicProvider
from .mock import MockProvider
from . import llm

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Canonical model
    "ChatRequest",
    "ChatResponse",
    "Message",
    "ToolCall",
    "ToolCallDelta",
    "ToolDefinition",
    "JSONSchemaSpec",
    "FinishReason",
    "StreamChunk",
    "Usage",
    "ResponseStream",
    "CancellationToken",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "UnknownProviderError",
    "TransportError",
    "APIError",
    "DecodeError",
    # Registry
    "ProviderRegistry",
    "default_registry",
    "register",
    "unregister",
    "get",
    "available",
    "load_plugins",
    # Config
    "get_provider_config",
    # Providers
    "OpenAIProvider",
    "GeminiProvider",
    "AnthropicProvider",
    "MockProvider",
    # High-level API
    "llm",
]
