"""
ChatResponse DTO returned by provider adapters.

Holds the accumulated text, completed tool calls, the canonical finish reason
and token usage. Streaming normalizers build the same object incrementally and
expose it once the stream ends.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .finish_reason import FinishReason
from .tool_call import ToolCall
from .usage import Usage


@dataclass
class ChatResponse:
    """Normalized chat response.

    Attributes:
        text: Concatenation of every text part, in order.
        tool_calls: Completed tool calls in the order the vendor produced them.
        finish_reason: Canonical finish reason.
        usage: Token usage (zeros when the vendor omitted it).
    """

    text: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    finish_reason: FinishReason = FinishReason.STOP
    usage: Usage = field(default_factory=Usage)

    def has_tool_calls(self) -> bool:
        """Return True when the response requests at least one tool call."""
        return bool(self.tool_calls)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the response."""
        return {
            "text": self.text,
            "tool_calls": [tc.to_dict() for tc in self.tool_calls],
            "finish_reason": self.finish_reason.value,
            "usage": self.usage.to_dict(),
        }


__all__ = ["ChatResponse"]
