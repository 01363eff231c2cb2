"""Deterministic in-process provider for tests and offline use.

Purpose
-------
Implement the provider contract (``call`` and ``call_stream``) without any
network traffic. ``call`` returns a canned ``ChatResponse``; ``call_stream``
replays scripted ``StreamChunk`` values through a ``StreamAccumulator`` so the
final response obeys exactly the accumulation rules of the real normalizers.
Every received request is recorded for assertions.

Registration
------------
The mock does not register itself. Tests register it explicitly, typically
with a closure returning a prepared instance::

    mock = MockProvider(response=ChatResponse(text="hi"))
    registry.register("mock", lambda: mock)

Failure modes
-------------
- ``error`` makes both ``call`` and ``call_stream`` raise it.
- ``stream_error`` is reported by the stream after the scripted chunks,
  without flushing in-progress tool calls.
- A cancelled token yields ``TransportError(code=cancelled)``.
"""

from __future__ import annotations

import threading
from typing import List, Optional, Sequence

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import ProviderError, TransportError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest, ChatResponse, StreamChunk, Usage
from ..base.streaming import ResponseStream, StreamAccumulator
from ..base.utils.messages import require_model


def _cancelled(token: CancellationToken, *, provider: str, model: Optional[str], phase: str) -> TransportError:
    return TransportError.from_exception(
        CancelledError(token.reason), provider=provider, phase=phase, model=model
    )


class MockStreamSource:
    """Pull source replaying scripted chunks with real accumulation semantics."""

    def __init__(
        self,
        chunks: Sequence[StreamChunk],
        *,
        provider: str,
        model: Optional[str],
        usage: Optional[Usage] = None,
        stream_error: Optional[ProviderError] = None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        self._pending = list(chunks)
        self._provider = provider
        self._model = model
        self._stream_error = stream_error
        self._token = token
        self._acc = StreamAccumulator()
        if usage is not None:
            self._acc.set_usage(
                prompt=usage.prompt_tokens,
                completion=usage.completion_tokens,
                total=usage.total_tokens,
            )
        self._current = StreamChunk()
        self._err: Optional[ProviderError] = None
        self._done = False
        self._closed = False

    def next(self) -> bool:
        if self._done:
            return False
        if self._token is not None and self._token.cancelled:
            self._err = _cancelled(self._token, provider=self._provider, model=self._model, phase="stream")
            self._done = True
            return False
        if not self._pending:
            self._done = True
            if self._stream_error is not None:
                self._err = self._stream_error
            else:
                self._acc.finalize()
            return False
        chunk = self._pending.pop(0)
        self._acc.add_text(chunk.text)
        if chunk.tool_call is not None:
            delta = chunk.tool_call
            self._acc.add_tool_fragment(delta.index, call_id=delta.id, name=delta.name, fragment=delta.arguments)
        if chunk.finish_reason is not None:
            self._acc.set_finish_reason(chunk.finish_reason)
        self._current = chunk
        return True

    def current(self) -> StreamChunk:
        return self._current

    def err(self) -> Optional[ProviderError]:
        return self._err

    def close(self) -> None:
        self._done = True
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def response(self) -> ChatResponse:
        return self._acc.snapshot()


class MockProvider:
    """Provider returning canned responses and scripted streams."""

    def __init__(
        self,
        response: Optional[ChatResponse] = None,
        *,
        chunks: Sequence[StreamChunk] = (),
        stream_usage: Optional[Usage] = None,
        error: Optional[ProviderError] = None,
        stream_error: Optional[ProviderError] = None,
        provider: str = "mock",
    ) -> None:
        self._response = response if response is not None else ChatResponse(text="mock response")
        self._chunks = tuple(chunks)
        self._stream_usage = stream_usage
        self._error = error
        self._stream_error = stream_error
        self._provider = provider
        self._requests: List[ChatRequest] = []
        self._lock = threading.Lock()
        self._logger = get_logger(f"relay.mock.{provider}")

    @property
    def provider_name(self) -> str:
        return self._provider

    @property
    def requests(self) -> List[ChatRequest]:
        """Requests received so far, oldest first."""
        with self._lock:
            return list(self._requests)

    @property
    def last_request(self) -> Optional[ChatRequest]:
        with self._lock:
            return self._requests[-1] if self._requests else None

    def _accept(self, request: ChatRequest, token: Optional[CancellationToken]) -> str:
        model = require_model(request, self._provider)
        if token is not None and token.cancelled:
            raise _cancelled(token, provider=self._provider, model=model, phase="request")
        with self._lock:
            self._requests.append(request)
        if self._error is not None:
            raise self._error
        return model

    def call(self, request: ChatRequest, *, token: Optional[CancellationToken] = None) -> ChatResponse:
        model = self._accept(request, token)
        ctx = LogContext(provider=self._provider, model=model).bind(operation="chat")
        normalized_log_event(self._logger, "chat.start", ctx, phase="start")
        canned = self._response
        response = ChatResponse(
            text=canned.text,
            tool_calls=list(canned.tool_calls),
            finish_reason=canned.finish_reason,
            usage=Usage(
                prompt_tokens=canned.usage.prompt_tokens,
                completion_tokens=canned.usage.completion_tokens,
                total_tokens=canned.usage.total_tokens,
            ),
        )
        normalized_log_event(self._logger, "chat.end", ctx, phase="finalize", tokens=response.usage)
        return response

    def call_stream(self, request: ChatRequest, *, token: Optional[CancellationToken] = None) -> ResponseStream:
        model = self._accept(request, token)
        source = MockStreamSource(
            self._chunks,
            provider=self._provider,
            model=model,
            usage=self._stream_usage,
            stream_error=self._stream_error,
            token=token,
        )
        return ResponseStream(source, token=token)


__all__ = ["MockProvider", "MockStreamSource"]
