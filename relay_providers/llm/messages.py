"""Constructors for the canonical ``Message`` roles."""

from __future__ import annotations

from typing import Iterable

from ..base.models import Message, ToolCall


def system_message(text: str) -> Message:
    return Message(role="system", content=text)


def user_message(text: str) -> Message:
    return Message(role="user", content=text)


def assistant_message(text: str) -> Message:
    return Message(role="assistant", content=text)


def assistant_message_with_tool_calls(text: str, tool_calls: Iterable[ToolCall]) -> Message:
    """Assistant turn that requested ``tool_calls`` (text may be empty)."""
    return Message(role="assistant", content=text, tool_calls=tuple(tool_calls))


def tool_message(tool_call_id: str, content: str) -> Message:
    """Result of one tool call, correlated by ``tool_call_id``."""
    return Message(role="tool", content=content, tool_call_id=tool_call_id)


__all__ = [
    "system_message",
    "user_message",
    "assistant_message",
    "assistant_message_with_tool_calls",
    "tool_message",
]
