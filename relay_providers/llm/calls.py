"""High-level call functions.

Purpose
-------
One-line entry points over the provider registry: validate options, look up
the provider, build a ``ChatRequest`` and wrap the result with conversation
history.

Failure modes
-------------
- Missing ``provider`` or ``model`` raises ``ConfigurationError`` before the
  registry is consulted and before any I/O.
- Unknown provider names raise ``UnknownProviderError`` from the registry.
- Provider failures propagate unchanged as ``ProviderError`` subclasses.
- ``call_parse`` never raises for invalid model output; the ``ParseError``
  is stored and raised from ``Response.parsed``.

Example
-------
>>> from relay_providers import llm
>>> resp = llm.call("Recommend a book", provider="openai", model="gpt-5")  # doctest: +SKIP
>>> resp.text  # doctest: +SKIP
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..base import registry
from ..base.cancellation import CancellationToken
from ..base.errors import ConfigurationError
from ..base.interfaces import LLMProvider, SupportsStreaming
from ..base.models import ChatRequest, JSONSchemaSpec, Message
from .errors import ParseError
from .options import CallOptions, prompt_messages
from .response import Response, history_with_reply
from .stream import Stream

ModelT = TypeVar("ModelT", bound=BaseModel)


def _prepare(options: Dict[str, Any]) -> Tuple[CallOptions, LLMProvider]:
    opts = CallOptions(**options)
    if not opts.provider:
        raise ConfigurationError("provider is required")
    if not opts.model:
        raise ConfigurationError("model is required", provider=opts.provider)
    return opts, registry.get(opts.provider)


def _resume_options(opts: CallOptions) -> Dict[str, Any]:
    return {"provider": opts.provider, "model": opts.model, "tools": list(opts.tools)}


def _schema_spec(output_type: Type[BaseModel]) -> JSONSchemaSpec:
    return JSONSchemaSpec(
        name=getattr(output_type, "__name__", "") or "response",
        schema=output_type.model_json_schema(),
        strict=True,
    )


def _invoke(
    messages: Sequence[Message],
    options: Dict[str, Any],
    *,
    token: Optional[CancellationToken],
    json_schema: Optional[JSONSchemaSpec] = None,
) -> Tuple[CallOptions, ChatRequest, Response[Any]]:
    opts, provider = _prepare(options)
    request = opts.build_request(messages, json_schema=json_schema)
    raw = provider.call(request, token=token)
    response: Response[Any] = Response(
        raw,
        messages=history_with_reply(request.messages, raw),
        resume_options=_resume_options(opts),
    )
    return opts, request, response


def _parse(response: Response[Any], output_type: Type[ModelT]) -> Response[ModelT]:
    target = getattr(output_type, "__name__", "") or "response"
    try:
        value = output_type.model_validate_json(response.text)
    except ValidationError as exc:
        return Response(
            response.raw,
            messages=response.messages,
            resume_options=response._resume_options,
            parse_error=ParseError(response.text, target, exc),
        )
    return Response(
        response.raw,
        messages=response.messages,
        resume_options=response._resume_options,
        parsed=value,
    )


def call(prompt: str, *, token: Optional[CancellationToken] = None, **options: Any) -> Response[str]:
    """Send ``prompt`` as a user message and return the text response."""
    return _invoke(prompt_messages(prompt), options, token=token)[2]


def call_messages(
    messages: Sequence[Message], *, token: Optional[CancellationToken] = None, **options: Any
) -> Response[str]:
    """Send a full message history."""
    return _invoke(list(messages), options, token=token)[2]


def call_parse(
    prompt: str,
    output_type: Type[ModelT],
    *,
    token: Optional[CancellationToken] = None,
    **options: Any,
) -> Response[ModelT]:
    """Request structured output shaped like ``output_type`` and validate it."""
    _, _, response = _invoke(prompt_messages(prompt), options, token=token, json_schema=_schema_spec(output_type))
    return _parse(response, output_type)


def call_messages_parse(
    messages: Sequence[Message],
    output_type: Type[ModelT],
    *,
    token: Optional[CancellationToken] = None,
    **options: Any,
) -> Response[ModelT]:
    _, _, response = _invoke(list(messages), options, token=token, json_schema=_schema_spec(output_type))
    return _parse(response, output_type)


def _open_stream(messages: Sequence[Message], options: Dict[str, Any], token: Optional[CancellationToken]) -> Stream:
    opts, provider = _prepare(options)
    if not isinstance(provider, SupportsStreaming):
        raise ConfigurationError(f"provider {opts.provider!r} does not support streaming", provider=opts.provider or "relay")
    request = opts.build_request(messages)
    stream = provider.call_stream(request, token=token)
    return Stream(stream, request_messages=request.messages, resume_options=_resume_options(opts))


def call_stream(prompt: str, *, token: Optional[CancellationToken] = None, **options: Any) -> Stream:
    """Stream the answer to ``prompt``."""
    return _open_stream(prompt_messages(prompt), options, token)


def call_messages_stream(
    messages: Sequence[Message], *, token: Optional[CancellationToken] = None, **options: Any
) -> Stream:
    return _open_stream(list(messages), options, token)


__all__ = [
    "call",
    "call_messages",
    "call_parse",
    "call_messages_parse",
    "call_stream",
    "call_messages_stream",
]
