"""Anthropic Messages API translation helpers.

Purpose:
- Side-effect-free mapping between the canonical model and the
  ``/v1/messages`` dialect, shared by the client and the streaming normalizer.

Mapping notes:
- System messages are lifted into the top-level ``system`` string, joined
  with blank lines.
- ``tool`` messages become ``tool_result`` blocks in a ``user`` turn;
  consecutive tool results share one turn, as the API requires all results
  for one assistant turn to arrive together.
- Assistant tool calls become ``tool_use`` blocks. Their ``input`` is the
  parsed argument object, or the raw string when it is not valid JSON.
- ``max_tokens`` is mandatory for this API; the configured default applies
  when the request leaves it unset.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from ..base.http import ErrorDetails
from ..base.models import (
    ChatRequest,
    ChatResponse,
    FinishReason,
    Message,
    ToolCall,
    ToolDefinition,
    Usage,
)
from ..base.utils.messages import join_system, split_system
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS

STOP_REASONS: Dict[str, FinishReason] = {
    "end_turn": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,
    "tool_use": FinishReason.TOOL_CALLS,
    "max_tokens": FinishReason.LENGTH,
}


def convert_stop_reason(reason: Optional[str]) -> FinishReason:
    """Map an Anthropic ``stop_reason``; unknown or missing values become ``stop``."""
    return STOP_REASONS.get(reason or "", FinishReason.STOP)


def _tool_input(arguments: str) -> Any:
    if not arguments:
        return {}
    try:
        return json.loads(arguments)
    except ValueError:
        return arguments


def build_messages(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for message in messages:
        if message.role == "tool":
            block = {
                "type": "tool_result",
                "tool_use_id": message.tool_call_id or "",
                "content": message.content,
            }
            previous = out[-1] if out else None
            if previous is not None and previous.get("_tool_results"):
                previous["content"].append(block)
            else:
                out.append({"role": "user", "content": [block], "_tool_results": True})
            continue
        content: List[Dict[str, Any]] = [
            {"type": "tool_use", "id": tc.id, "name": tc.name, "input": _tool_input(tc.arguments)}
            for tc in message.tool_calls
        ]
        if message.content:
            content.append({"type": "text", "text": message.content})
        if content:
            out.append({"role": "assistant" if message.role == "assistant" else "user", "content": content})
    for entry in out:
        entry.pop("_tool_results", None)
    return out


def build_tools(tools: Sequence[ToolDefinition]) -> List[Dict[str, Any]]:
    result = []
    for tool in tools:
        entry: Dict[str, Any] = {"name": tool.name}
        if tool.description:
            entry["description"] = tool.description
        entry["input_schema"] = tool.parameters or {"type": "object", "properties": {}}
        result.append(entry)
    return result


def build_payload(
    request: ChatRequest,
    *,
    stream: bool,
    default_max_tokens: int = ANTHROPIC_DEFAULT_MAX_TOKENS,
) -> Dict[str, Any]:
    """Build the ``/v1/messages`` body for ``request``.

    ``seed`` has no equivalent in this API and is not sent.
    """
    system_texts, rest = split_system(request.messages)
    payload: Dict[str, Any] = {
        "model": request.model,
        "max_tokens": request.max_tokens or default_max_tokens,
        "messages": build_messages(rest),
    }
    system = join_system(system_texts)
    if system:
        payload["system"] = system
    optional = {
        "temperature": request.temperature,
        "top_p": request.top_p,
        "top_k": request.top_k,
    }
    payload.update({k: v for k, v in optional.items() if v is not None})
    if request.stop_sequences:
        payload["stop_sequences"] = list(request.stop_sequences)
    if request.tools:
        payload["tools"] = build_tools(request.tools)
    if request.json_schema is not None:
        payload["output_format"] = {"type": "json_schema", "schema": dict(request.json_schema.schema)}
    if stream:
        payload["stream"] = True
    return payload


def convert_usage(usage: Any) -> Usage:
    if not isinstance(usage, dict):
        return Usage()
    prompt = int(usage.get("input_tokens") or 0)
    completion = int(usage.get("output_tokens") or 0)
    return Usage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=prompt + completion)


def convert_response(data: Dict[str, Any]) -> ChatResponse:
    """Map a Messages API body to ``ChatResponse``."""
    texts: List[str] = []
    tool_calls: List[ToolCall] = []
    for block in data.get("content") or []:
        kind = block.get("type")
        if kind == "text":
            texts.append(block.get("text") or "")
        elif kind == "tool_use":
            name = block.get("name") or ""
            tool_calls.append(
                ToolCall(
                    id=block.get("id") or name,
                    name=name,
                    arguments=json.dumps(block.get("input") or {}, ensure_ascii=False),
                )
            )
    return ChatResponse(
        text="".join(texts),
        tool_calls=tool_calls,
        finish_reason=convert_stop_reason(data.get("stop_reason")),
        usage=convert_usage(data.get("usage")),
    )


def parse_error_envelope(data: Any) -> Optional[ErrorDetails]:
    """Parse ``{"type": "error", "error": {"type", "message"}}``; None when absent."""
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return None
    return ErrorDetails(message=str(error.get("message") or ""), error_type=error.get("type"))


__all__ = [
    "STOP_REASONS",
    "convert_stop_reason",
    "build_messages",
    "build_tools",
    "build_payload",
    "convert_usage",
    "convert_response",
    "parse_error_envelope",
]
