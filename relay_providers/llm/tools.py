"""Executable tools and the helper that answers a batch of tool calls.

Purpose
-------
Let callers declare Python functions as tools the model may call, advertise
them on a request, and turn the model's ``ToolCall`` list back into ``tool``
messages ready for the next turn.

Design
------
- ``Tool`` is a structural protocol; anything with ``name``, ``description``,
  ``parameters()`` and ``execute(arguments)`` qualifies.
- ``FunctionTool`` pairs a callable with a pydantic input model. The model's
  ``model_json_schema()`` is the advertised parameter schema, and incoming
  argument JSON is validated into that model before the callable runs.
- ``execute_tool_calls`` never lets a tool exception escape: the message
  content becomes ``"Error: <message>"`` so the model can react. Only an
  unknown tool name is raised, as ``ToolNotFoundError``.
"""

from __future__ import annotations

import json
import threading
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel

from ..base.errors import classify_exception
from ..base.logging import get_logger, log_event
from ..base.models import Message, ToolCall, ToolDefinition
from .errors import ToolNotFoundError
from .messages import tool_message

InputT = TypeVar("InputT", bound=BaseModel)

_logger = get_logger("relay.llm.tools")


@runtime_checkable
class Tool(Protocol):
    """Executable tool contract."""

    @property
    def name(self) -> str:
        ...

    @property
    def description(self) -> str:
        ...

    def parameters(self) -> Dict[str, Any]:
        ...

    def execute(self, arguments: str) -> Any:
        ...


class FunctionTool(Generic[InputT]):
    """Tool backed by a callable taking one validated pydantic input."""

    def __init__(
        self,
        name: str,
        description: str,
        fn: Callable[[InputT], Any],
        input_model: Type[InputT],
    ) -> None:
        if not name:
            raise ValueError("tool name must be non-empty")
        self._name = name
        self._description = description
        self._fn = fn
        self._input_model = input_model
        self._schema = input_model.model_json_schema()

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def input_model(self) -> Type[InputT]:
        return self._input_model

    def parameters(self) -> Dict[str, Any]:
        return dict(self._schema)

    def execute(self, arguments: str) -> Any:
        payload = self._input_model.model_validate_json(arguments or "{}")
        return self._fn(payload)

    def typed_call(self, payload: InputT) -> Any:
        """Invoke the callable directly, skipping JSON decoding."""
        return self._fn(payload)

    def definition(self) -> ToolDefinition:
        return tool_definition(self)


def tool_definition(tool: Tool) -> ToolDefinition:
    """Build the canonical declaration advertised to the model."""
    return ToolDefinition(name=tool.name, description=tool.description, parameters=tool.parameters())


class ToolRegistry:
    """Name-keyed collection of tools; a later registration replaces an earlier one."""

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: Dict[str, Tool] = {}
        self._lock = threading.Lock()
        self.register(*tools)

    def register(self, *tools: Tool) -> None:
        with self._lock:
            for tool in tools:
                self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[Tool]:
        with self._lock:
            return self._tools.get(name)

    def all(self) -> List[Tool]:
        """Registered tools in registration order."""
        with self._lock:
            return list(self._tools.values())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)


def _result_content(result: Any) -> str:
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump_json()
    try:
        return json.dumps(result, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        return f"Error marshaling result: {exc}"


def execute_tool_calls(tool_calls: Iterable[ToolCall], registry: ToolRegistry) -> List[Message]:
    """Run every call and return one ``tool`` message per call, in order.

    Raises:
        ToolNotFoundError: when a call names a tool missing from ``registry``;
            no later call is executed.
    """
    messages: List[Message] = []
    for call in tool_calls:
        tool = registry.get(call.name)
        if tool is None:
            raise ToolNotFoundError(call.name)
        try:
            content = _result_content(tool.execute(call.arguments))
        except Exception as exc:  # tool failures are reported to the model
            log_event(
                _logger,
                "tool.error",
                tool=call.name,
                call_id=call.id,
                error=type(exc).__name__,
                error_code=classify_exception(exc).value,
            )
            content = f"Error: {exc}"
        messages.append(tool_message(call.id, content))
    return messages


__all__ = [
    "Tool",
    "FunctionTool",
    "ToolRegistry",
    "tool_definition",
    "execute_tool_calls",
]
