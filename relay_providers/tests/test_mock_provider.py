"""MockProvider: canned responses, scripted streams, request capture."""

from __future__ import annotations

import pytest

from relay_providers.base.cancellation import CancellationToken
from relay_providers.base.errors import APIError, ConfigurationError, ErrorCode, TransportError
from relay_providers.base.interfaces import LLMProvider, SupportsStreaming
from relay_providers.base.models import (
    ChatRequest,
    ChatResponse,
    FinishReason,
    Message,
    StreamChunk,
    ToolCall,
    ToolCallDelta,
    Usage,
)
from relay_providers.mock import MockProvider
from relay_providers.tests.streaming.helpers import drain


def _request(model: str = "mock-1") -> ChatRequest:
    return ChatRequest(model=model, messages=[Message(role="user", content="ping")])


def test_satisfies_provider_protocols():
    mock = MockProvider()
    assert isinstance(mock, LLMProvider)
    assert isinstance(mock, SupportsStreaming)
    assert mock.provider_name == "mock"


def test_default_response_and_request_capture():
    mock = MockProvider()
    resp = mock.call(_request())
    assert resp.text == "mock response"
    assert mock.last_request == _request()
    assert len(mock.requests) == 1


def test_canned_response_is_copied():
    canned = ChatResponse(text="hi", tool_calls=[ToolCall(id="1", name="f", arguments="{}")], usage=Usage(1, 2, 3))
    mock = MockProvider(canned)
    first = mock.call(_request())
    first.tool_calls.clear()
    first.usage.total_tokens = 99
    second = mock.call(_request())
    assert second.tool_calls == canned.tool_calls
    assert second.usage.total_tokens == 3


def test_missing_model_is_rejected():
    mock = MockProvider()
    with pytest.raises(ConfigurationError):
        mock.call(_request(model=""))
    assert mock.requests == []


def test_configured_error_is_raised_after_recording():
    error = APIError("boom", provider="mock", status_code=500)
    mock = MockProvider(error=error)
    with pytest.raises(APIError):
        mock.call(_request())
    with pytest.raises(APIError):
        mock.call_stream(_request())
    assert len(mock.requests) == 2


def test_cancelled_token():
    token = CancellationToken()
    token.cancel()
    with pytest.raises(TransportError) as info:
        MockProvider().call(_request(), token=token)
    assert info.value.code is ErrorCode.CANCELLED


def test_scripted_stream_accumulates():
    chunks = [
        StreamChunk(text="Hel"),
        StreamChunk(text="lo"),
        StreamChunk(tool_call=ToolCallDelta(index=0, id="c1", name="f", arguments='{"a"')),
        StreamChunk(tool_call=ToolCallDelta(index=0, arguments=":1}")),
        StreamChunk(finish_reason=FinishReason.TOOL_CALLS),
    ]
    mock = MockProvider(chunks=chunks, stream_usage=Usage(2, 3, 5))
    stream = mock.call_stream(_request())
    seen, err = drain(stream)
    assert err is None
    assert seen == chunks
    resp = stream.response()
    assert resp.text == "Hello"
    assert resp.tool_calls == [ToolCall(id="c1", name="f", arguments='{"a":1}')]
    assert resp.finish_reason is FinishReason.TOOL_CALLS
    assert resp.usage.total_tokens == 5


def test_stream_error_does_not_flush():
    chunks = [StreamChunk(tool_call=ToolCallDelta(index=0, id="c", name="f", arguments="{"))]
    error = TransportError("reset", provider="mock", phase="stream")
    stream = MockProvider(chunks=chunks, stream_error=error).call_stream(_request())
    seen, err = drain(stream)
    assert len(seen) == 1
    assert err is error
    assert stream.response().tool_calls == []


def test_stream_cancel_mid_way():
    token = CancellationToken()
    stream = MockProvider(chunks=[StreamChunk(text="a"), StreamChunk(text="b")]).call_stream(_request(), token=token)
    assert stream.next()
    stream.cancel("enough")
    assert stream.next() is False
    assert stream.err().code is ErrorCode.CANCELLED


def test_stream_close_stops_iteration():
    stream = MockProvider(chunks=[StreamChunk(text="a"), StreamChunk(text="b")]).call_stream(_request())
    stream.close()
    assert stream.next() is False
    assert stream.err() is None


def test_registered_mock_is_resolvable():
    from relay_providers.base import registry

    mock = MockProvider(ChatResponse(text="registered"))
    registry.register("mock", lambda: mock)
    assert registry.get("mock").call(_request()).text == "registered"
