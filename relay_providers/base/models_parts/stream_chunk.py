"""
StreamChunk DTO: one increment of a streamed response.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .finish_reason import FinishReason
from .tool_call_delta import ToolCallDelta


@dataclass(frozen=True)
class StreamChunk:
    """Single streaming increment.

    Attributes:
        text: Text delta, surfaced verbatim (may be empty).
        tool_call: Tool-call fragment carried by this increment, if any.
        finish_reason: Set only on the terminal chunk of the choice.
    """

    text: str = ""
    tool_call: Optional[ToolCallDelta] = None
    finish_reason: Optional[FinishReason] = None

    @property
    def is_empty(self) -> bool:
        return not self.text and self.tool_call is None and self.finish_reason is None


__all__ = ["StreamChunk"]
