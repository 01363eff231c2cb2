"""High-level call API over the provider registry.

Exposes the ``call*`` functions, message constructors, ``CallOptions``,
``Response``/``Stream`` wrappers and the tool helpers.
"""

from .errors import NotParsedError, ParseError, ToolNotFoundError
from .messages import (
    assistant_message,
    assistant_message_with_tool_calls,
    system_message,
    tool_message,
    user_message,
)
from .tools import FunctionTool, Tool, ToolRegistry, execute_tool_calls, tool_definition
from .options import CallOptions
from .response import Response
from .stream import Stream
from .calls import (
    call,
    call_messages,
    call_messages_parse,
    call_messages_stream,
    call_parse,
    call_stream,
)

__all__ = [
    "call",
    "call_messages",
    "call_parse",
    "call_messages_parse",
    "call_stream",
    "call_messages_stream",
    "CallOptions",
    "Response",
    "Stream",
    "system_message",
    "user_message",
    "assistant_message",
    "assistant_message_with_tool_calls",
    "tool_message",
    "Tool",
    "FunctionTool",
    "ToolRegistry",
    "tool_definition",
    "execute_tool_calls",
    "ParseError",
    "NotParsedError",
    "ToolNotFoundError",
]
