"""Canonical request/response model public surface.

Re-exports the one-class-per-file implementations under
``relay_providers.base.models_parts`` so callers have a single stable import
path. These types carry no behavior beyond small serialization helpers.
"""

from .models_parts import (
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

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "FinishReason",
    "JSONSchemaSpec",
    "Message",
    "Role",
    "StreamChunk",
    "ToolCall",
    "ToolCallDelta",
    "ToolDefinition",
    "Usage",
]
