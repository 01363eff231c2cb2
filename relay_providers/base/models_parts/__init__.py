"""Canonical model parts (one class per module).

Prefer importing from ``relay_providers.base.models`` for the stable surface.
"""

from .finish_reason import FinishReason
from .tool_call import ToolCall
from .message import Message, Role, ROLES
from .tool_definition import ToolDefinition
from .json_schema_spec import JSONSchemaSpec
from .chat_request import ChatRequest
from .usage import Usage
from .chat_response import ChatResponse
from .tool_call_delta import ToolCallDelta
from .stream_chunk import StreamChunk

__all__ = [
    "FinishReason",
    "ToolCall",
    "Message",
    "Role",
    "ROLES",
    "ToolDefinition",
    "JSONSchemaSpec",
    "ChatRequest",
    "Usage",
    "ChatResponse",
    "ToolCallDelta",
    "StreamChunk",
]
