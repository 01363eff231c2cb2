"""Message helpers shared across vendor adapters.

Helpers here are side-effect free and operate on canonical ``Message`` and
``ChatRequest`` values only.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..errors import ConfigurationError
from ..models import ChatRequest, Message


def split_system(messages: Sequence[Message]) -> Tuple[List[str], List[Message]]:
    """Separate system messages from the conversation.

    Returns ``(system_texts, rest)`` with both lists in their original order.
    Empty system messages are dropped.
    """
    system: List[str] = []
    rest: List[Message] = []
    for message in messages:
        if message.role == "system":
            if message.content:
                system.append(message.content)
            continue
        rest.append(message)
    return system, rest


def join_system(texts: Sequence[str]) -> Optional[str]:
    """Join system texts with blank lines; None when there are none."""
    return "\n\n".join(texts) if texts else None


def require_model(request: ChatRequest, provider: str) -> str:
    """Return the request's model or raise ``ConfigurationError`` before any I/O."""
    if not request.model:
        raise ConfigurationError("model is required", provider=provider)
    return request.model


__all__ = ["split_system", "join_system", "require_model"]
