"""OpenAI chat completions translation helpers.

Purpose:
- Side-effect-free mapping between the canonical model and the
  ``/chat/completions`` JSON dialect: request payload, response conversion,
  finish-reason vocabulary and the ``{"error": {...}}`` envelope.
- Shared by the non-streaming client and the streaming normalizer so both
  paths agree on every mapping.
"""

from __future__ import annotations

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
from ..base.streaming.accumulator import EMPTY_ARGUMENTS
from .structured import make_all_properties_required

FINISH_REASONS: Dict[str, FinishReason] = {
    "stop": FinishReason.STOP,
    "tool_calls": FinishReason.TOOL_CALLS,
    "function_call": FinishReason.TOOL_CALLS,
    "length": FinishReason.LENGTH,
}


def convert_finish_reason(reason: Optional[str]) -> FinishReason:
    """Map a vendor finish reason; unknown or missing values become ``stop``."""
    return FINISH_REASONS.get(reason or "", FinishReason.STOP)


def build_message(message: Message) -> Dict[str, Any]:
    out: Dict[str, Any] = {"role": message.role}
    if message.content:
        out["content"] = message.content
    if message.tool_calls:
        out["tool_calls"] = [
            {
                "id": tc.id,
                "type": "function",
                "function": {"name": tc.name, "arguments": tc.arguments},
            }
            for tc in message.tool_calls
        ]
    if message.tool_call_id:
        out["tool_call_id"] = message.tool_call_id
    return out


def build_tools(tools: Sequence[ToolDefinition]) -> List[Dict[str, Any]]:
    result = []
    for tool in tools:
        function: Dict[str, Any] = {"name": tool.name}
        if tool.description:
            function["description"] = tool.description
        if tool.parameters:
            function["parameters"] = tool.parameters
        result.append({"type": "function", "function": function})
    return result


def build_payload(request: ChatRequest, *, stream: bool) -> Dict[str, Any]:
    """Build the ``/chat/completions`` body for ``request``.

    ``top_k`` has no equivalent in this API and is not sent.
    """
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": [build_message(m) for m in request.messages],
    }
    optional = {
        "temperature": request.temperature,
        "max_tokens": request.max_tokens,
        "top_p": request.top_p,
        "seed": request.seed,
    }
    payload.update({k: v for k, v in optional.items() if v is not None})
    if request.stop_sequences:
        payload["stop"] = list(request.stop_sequences)
    if request.tools:
        payload["tools"] = build_tools(request.tools)
    if request.json_schema is not None:
        payload["response_format"] = {
            "type": "json_schema",
            "json_schema": {
                "name": request.json_schema.name,
                "strict": request.json_schema.strict,
                "schema": make_all_properties_required(request.json_schema.schema),
            },
        }
    if stream:
        payload["stream"] = True
    return payload


def convert_usage(usage: Any) -> Usage:
    if not isinstance(usage, dict):
        return Usage()
    prompt = int(usage.get("prompt_tokens") or 0)
    completion = int(usage.get("completion_tokens") or 0)
    total = usage.get("total_tokens")
    return Usage(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=int(total) if total is not None else prompt + completion,
    )


def convert_response(data: Dict[str, Any]) -> ChatResponse:
    """Map a chat completion body to ``ChatResponse`` (first choice only)."""
    usage = convert_usage(data.get("usage"))
    choices = data.get("choices") or []
    if not choices:
        return ChatResponse(usage=usage)
    choice = choices[0] or {}
    message = choice.get("message") or {}
    tool_calls = []
    for i, tc in enumerate(message.get("tool_calls") or []):
        function = tc.get("function") or {}
        name = function.get("name") or ""
        tool_calls.append(
            ToolCall(
                id=tc.get("id") or name or f"call_{i}",
                name=name,
                arguments=function.get("arguments") or EMPTY_ARGUMENTS,
            )
        )
    return ChatResponse(
        text=message.get("content") or "",
        tool_calls=tool_calls,
        finish_reason=convert_finish_reason(choice.get("finish_reason")),
        usage=usage,
    )


def parse_error_envelope(data: Any) -> Optional[ErrorDetails]:
    """Parse ``{"error": {"message", "type", "code"}}``; None when absent."""
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return None
    code = error.get("code")
    return ErrorDetails(
        message=str(error.get("message") or ""),
        error_type=error.get("type"),
        error_code=str(code) if code is not None else None,
    )


__all__ = [
    "FINISH_REASONS",
    "convert_finish_reason",
    "build_message",
    "build_tools",
    "build_payload",
    "convert_usage",
    "convert_response",
    "parse_error_envelope",
]
