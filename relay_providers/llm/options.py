"""Per-call options for the high-level API.

Every ``llm`` call function accepts these as keyword arguments and validates
them through :class:`CallOptions` before anything else happens. Unknown
keywords are rejected by pydantic.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..base.models import ChatRequest, JSONSchemaSpec, Message, ToolDefinition
from .messages import system_message, user_message
from .tools import Tool, tool_definition


class CallOptions(BaseModel):
    """Validated call configuration.

    Attributes:
        provider: Registry name of the provider (required at call time).
        model: Model identifier (required at call time).
        temperature, max_tokens, top_p, top_k, seed, stop_sequences: Sampling
            controls copied onto the request.
        system_message: Prepended as a ``system`` message when set.
        tools: ``Tool`` objects (or ready ``ToolDefinition`` values) offered to
            the model.
        messages: Prior conversation inserted before the call's own messages.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    provider: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(default=None, gt=0)
    seed: Optional[int] = None
    stop_sequences: List[str] = Field(default_factory=list)
    system_message: Optional[str] = None
    tools: List[Any] = Field(default_factory=list)
    messages: List[Any] = Field(default_factory=list)

    @field_validator("tools")
    @classmethod
    def _check_tools(cls, value: List[Any]) -> List[Any]:
        for tool in value:
            if not isinstance(tool, (ToolDefinition, Tool)):
                raise ValueError(f"not a tool: {tool!r}")
        return value

    @field_validator("messages")
    @classmethod
    def _check_messages(cls, value: List[Any]) -> List[Any]:
        for message in value:
            if not isinstance(message, Message):
                raise ValueError(f"not a Message: {message!r}")
        return value

    def tool_definitions(self) -> List[ToolDefinition]:
        return [t if isinstance(t, ToolDefinition) else tool_definition(t) for t in self.tools]

    def conversation(self, messages: Sequence[Message]) -> List[Message]:
        """System message, then prior history, then ``messages``."""
        out: List[Message] = []
        if self.system_message:
            out.append(system_message(self.system_message))
        out.extend(self.messages)
        out.extend(messages)
        return out

    def build_request(
        self,
        messages: Sequence[Message],
        *,
        json_schema: Optional[JSONSchemaSpec] = None,
    ) -> ChatRequest:
        return ChatRequest(
            model=self.model or "",
            messages=tuple(self.conversation(messages)),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
            seed=self.seed,
            stop_sequences=tuple(self.stop_sequences),
            tools=tuple(self.tool_definitions()),
            json_schema=json_schema,
        )


def prompt_messages(prompt: str) -> List[Message]:
    """A single user turn, or nothing for an empty prompt."""
    return [user_message(prompt)] if prompt else []


__all__ = ["CallOptions", "prompt_messages"]
