"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the
sender role. Assistant messages may carry tool calls instead of (or in
addition to) text; ``tool`` messages answer one of those calls and carry its
identifier in ``tool_call_id``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

from .tool_call import ToolCall


# Message roles used across providers.
Role = Literal["system", "user", "assistant", "tool"]

ROLES: Tuple[str, ...] = ("system", "user", "assistant", "tool")


@dataclass(frozen=True)
class Message:
    """A chat message used by provider-agnostic DTOs.

    Attributes:
        role: The role of the message author.
        content: Plain text content. May be empty when an assistant message
            only carries tool calls.
        tool_calls: Calls requested by the assistant (assistant role only).
        tool_call_id: Identifier of the call this message answers (tool role
            only).
    """

    role: Role
    content: str = ""
    tool_calls: Tuple[ToolCall, ...] = field(default_factory=tuple)
    tool_call_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"unsupported message role: {self.role!r}")
        if not isinstance(self.tool_calls, tuple):
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls or ()))

    def has_tool_calls(self) -> bool:
        """Return True when the message carries at least one tool call."""
        return bool(self.tool_calls)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the message."""
        data: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        return data


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
