"""High-level response wrapper with conversation history.

``Response`` exposes the canonical ``ChatResponse`` fields, the full message
history (request messages plus the assistant reply) and, for ``call_parse``
results, the validated output object. ``resume`` and
``resume_with_tool_outputs`` continue the conversation with the same
provider, model and tools.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from ..base.errors import ConfigurationError
from ..base.models import ChatResponse, FinishReason, Message, ToolCall, Usage
from .errors import NotParsedError, ParseError
from .messages import assistant_message, assistant_message_with_tool_calls, user_message

T = TypeVar("T")

_UNSET: Any = object()


def history_with_reply(request_messages: Sequence[Message], raw: ChatResponse) -> List[Message]:
    """Request messages followed by the assistant turn that answered them."""
    history = list(request_messages)
    if raw.tool_calls:
        history.append(assistant_message_with_tool_calls(raw.text, raw.tool_calls))
    else:
        history.append(assistant_message(raw.text))
    return history


class Response(Generic[T]):
    """Result of a high-level call."""

    def __init__(
        self,
        raw: ChatResponse,
        *,
        messages: Sequence[Message] = (),
        resume_options: Optional[Dict[str, Any]] = None,
        parsed: Any = _UNSET,
        parse_error: Optional[ParseError] = None,
    ) -> None:
        self._raw = raw
        self._messages = list(messages)
        self._resume_options = dict(resume_options) if resume_options is not None else None
        self._parsed = parsed
        self._parse_error = parse_error

    @property
    def raw(self) -> ChatResponse:
        return self._raw

    @property
    def text(self) -> str:
        return self._raw.text

    @property
    def tool_calls(self) -> List[ToolCall]:
        return list(self._raw.tool_calls)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self._raw.tool_calls)

    @property
    def usage(self) -> Usage:
        return self._raw.usage

    @property
    def finish_reason(self) -> FinishReason:
        return self._raw.finish_reason

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def parse_error(self) -> Optional[ParseError]:
        return self._parse_error

    @property
    def parsed(self) -> T:
        """The validated output object.

        Raises:
            ParseError: the text did not validate into the output type.
            NotParsedError: the response came from a call without an output type.
        """
        if self._parse_error is not None:
            raise self._parse_error
        if self._parsed is _UNSET:
            raise NotParsedError()
        return self._parsed

    def _resume(self, extra: Sequence[Message], overrides: Dict[str, Any]) -> "Response[str]":
        if self._resume_options is None:
            raise ConfigurationError("cannot resume: response carries no call configuration")
        from .calls import call_messages

        options = dict(self._resume_options)
        options.update(overrides)
        return call_messages([*self._messages, *extra], **options)

    def resume(self, content: str, **options: Any) -> "Response[str]":
        """Continue the conversation with one more user turn."""
        return self._resume([user_message(content)], options)

    def resume_with_tool_outputs(self, tool_outputs: Sequence[Message], **options: Any) -> "Response[str]":
        """Continue the conversation with tool results (see ``execute_tool_calls``)."""
        return self._resume(list(tool_outputs), options)

    def __repr__(self) -> str:
        return f"Response(text={self.text!r}, finish_reason={self.finish_reason.value!r})"


__all__ = ["Response", "history_with_reply"]
