"""Gemini ``generateContent`` translation helpers.

Purpose:
- Side-effect-free mapping between the canonical model and the Gemini
  ``contents``/``parts`` dialect, shared by the non-streaming client and the
  streaming normalizer.

Mapping notes:
- Roles: ``user`` stays ``user``, ``assistant`` becomes ``model``. System
  messages move to ``systemInstruction``.
- Tool results become a ``user`` turn with a ``functionResponse`` part whose
  ``name`` is the correlated tool-call id. The response must be an object,
  so non-object JSON (or plain text) content is wrapped as ``{"result": ...}``.
- Gemini has no separate call ids on older models; a function call without
  an ``id`` uses its name as the id.
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

FINISH_REASONS: Dict[str, FinishReason] = {
    "STOP": FinishReason.STOP,
    "MAX_TOKENS": FinishReason.LENGTH,
    "TOOL_USE": FinishReason.TOOL_CALLS,
    "FUNCTION_CALL": FinishReason.TOOL_CALLS,
}

JSON_MIME_TYPE = "application/json"


def convert_finish_reason(reason: Optional[str]) -> FinishReason:
    """Map a Gemini ``finishReason``; unknown or missing values become ``stop``."""
    return FINISH_REASONS.get(reason or "", FinishReason.STOP)


def _parse_args(arguments: str) -> Dict[str, Any]:
    if not arguments:
        return {}
    try:
        value = json.loads(arguments)
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}


def _function_response(message: Message) -> Dict[str, Any]:
    try:
        value = json.loads(message.content) if message.content else None
    except ValueError:
        value = None
    response = value if isinstance(value, dict) else {"result": message.content}
    return {"functionResponse": {"name": message.tool_call_id or "", "response": response}}


def build_contents(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    contents: List[Dict[str, Any]] = []
    for message in messages:
        if message.role == "tool":
            contents.append({"role": "user", "parts": [_function_response(message)]})
            continue
        parts: List[Dict[str, Any]] = [
            {"functionCall": {"name": tc.name, "args": _parse_args(tc.arguments)}}
            for tc in message.tool_calls
        ]
        if message.content:
            parts.append({"text": message.content})
        if parts:
            role = "model" if message.role == "assistant" else "user"
            contents.append({"role": role, "parts": parts})
    return contents


def build_tools(tools: Sequence[ToolDefinition]) -> List[Dict[str, Any]]:
    declarations = []
    for tool in tools:
        decl: Dict[str, Any] = {"name": tool.name}
        if tool.description:
            decl["description"] = tool.description
        if tool.parameters:
            decl["parameters"] = tool.parameters
        declarations.append(decl)
    return [{"functionDeclarations": declarations}]


def build_generation_config(request: ChatRequest) -> Dict[str, Any]:
    config: Dict[str, Any] = {}
    optional = {
        "temperature": request.temperature,
        "maxOutputTokens": request.max_tokens,
        "topP": request.top_p,
        "topK": request.top_k,
    }
    config.update({k: v for k, v in optional.items() if v is not None})
    if request.stop_sequences:
        config["stopSequences"] = list(request.stop_sequences)
    if request.json_schema is not None:
        config["responseMimeType"] = JSON_MIME_TYPE
        config["responseSchema"] = dict(request.json_schema.schema)
    return config


def build_payload(request: ChatRequest) -> Dict[str, Any]:
    """Build the ``generateContent`` body (identical for streaming)."""
    system_texts, rest = split_system(request.messages)
    payload: Dict[str, Any] = {"contents": build_contents(rest)}
    system = join_system(system_texts)
    if system:
        payload["systemInstruction"] = {"parts": [{"text": system}]}
    config = build_generation_config(request)
    if config:
        payload["generationConfig"] = config
    if request.tools:
        payload["tools"] = build_tools(request.tools)
    return payload


def function_call_fields(part: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """Return ``{"id", "name", "arguments"}`` for a ``functionCall`` part."""
    call = part.get("functionCall")
    if not isinstance(call, dict):
        return None
    name = call.get("name") or ""
    return {
        "id": call.get("id") or name,
        "name": name,
        "arguments": json.dumps(call.get("args") or {}, ensure_ascii=False),
    }


def usage_fields(metadata: Any) -> Optional[Dict[str, Optional[int]]]:
    if not isinstance(metadata, dict):
        return None
    return {
        "prompt": metadata.get("promptTokenCount"),
        "completion": metadata.get("candidatesTokenCount"),
        "total": metadata.get("totalTokenCount"),
    }


def convert_usage(metadata: Any) -> Usage:
    fields = usage_fields(metadata)
    if fields is None:
        return Usage()
    prompt = int(fields["prompt"] or 0)
    completion = int(fields["completion"] or 0)
    total = fields["total"]
    return Usage(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=int(total) if total is not None else prompt + completion,
    )


def convert_response(data: Dict[str, Any]) -> ChatResponse:
    """Map a ``generateContent`` body to ``ChatResponse`` (first candidate)."""
    usage = convert_usage(data.get("usageMetadata"))
    candidates = data.get("candidates") or []
    if not candidates:
        return ChatResponse(usage=usage)
    candidate = candidates[0] or {}
    content = candidate.get("content") or {}
    texts: List[str] = []
    tool_calls: List[ToolCall] = []
    for part in content.get("parts") or []:
        if part.get("text"):
            texts.append(part["text"])
        fields = function_call_fields(part)
        if fields is not None:
            tool_calls.append(ToolCall(**fields))
    reason = convert_finish_reason(candidate.get("finishReason"))
    if tool_calls and reason is FinishReason.STOP:
        reason = FinishReason.TOOL_CALLS
    return ChatResponse(text="".join(texts), tool_calls=tool_calls, finish_reason=reason, usage=usage)


def parse_error_envelope(data: Any) -> Optional[ErrorDetails]:
    """Parse ``{"error": {"code", "message", "status"}}``; None when absent."""
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return None
    code = error.get("code")
    return ErrorDetails(
        message=str(error.get("message") or ""),
        error_type=error.get("status"),
        error_code=str(code) if code is not None else None,
    )


__all__ = [
    "FINISH_REASONS",
    "JSON_MIME_TYPE",
    "convert_finish_reason",
    "build_contents",
    "build_tools",
    "build_generation_config",
    "build_payload",
    "function_call_fields",
    "usage_fields",
    "convert_usage",
    "convert_response",
    "parse_error_envelope",
]
