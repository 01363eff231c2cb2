"""
ChatRequest DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to each vendor's JSON dialect. The
request carries model selection, the ordered conversation, optional sampling
parameters, tool declarations and an optional structured-output descriptor.
Instances are immutable; sequence fields are coerced to tuples on creation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .json_schema_spec import JSONSchemaSpec
from .message import Message
from .tool_definition import ToolDefinition


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Target model identifier. Mandatory; adapters reject an empty
            value before any network activity.
        messages: Ordered conversation.
        max_tokens: Completion token cap (adapters map the parameter name).
        temperature: Sampling temperature.
        top_p: Nucleus sampling mass.
        top_k: Top-k sampling (not every vendor accepts it).
        seed: Deterministic sampling seed (not every vendor accepts it).
        stop_sequences: Sequences that end generation.
        tools: Tools the model may call.
        json_schema: Structured-output descriptor.

    Methods:
        to_dict: Return a JSON-serializable dictionary of the request.
    """

    model: str
    messages: Tuple[Message, ...] = field(default_factory=tuple)
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    seed: Optional[int] = None
    stop_sequences: Tuple[str, ...] = field(default_factory=tuple)
    tools: Tuple[ToolDefinition, ...] = field(default_factory=tuple)
    json_schema: Optional[JSONSchemaSpec] = None

    def __post_init__(self) -> None:
        for name in ("messages", "stop_sequences", "tools"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value or ()))

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "top_k": self.top_k,
            "seed": self.seed,
            "stop_sequences": list(self.stop_sequences),
            "tools": [
                {"name": t.name, "description": t.description, "parameters": t.parameters}
                for t in self.tools
            ],
            "json_schema": (
                {"name": self.json_schema.name, "schema": self.json_schema.schema, "strict": self.json_schema.strict}
                if self.json_schema
                else None
            ),
        }


__all__ = [
    "ChatRequest",
]
