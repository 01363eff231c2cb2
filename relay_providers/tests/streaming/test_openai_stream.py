"""OpenAI streaming normalizer behaviour over canned SSE bodies."""

from __future__ import annotations

import pytest

from relay_providers.base.errors import APIError, DecodeError, ErrorCode, TransportError
from relay_providers.base.models import ChatRequest, FinishReason, Message, ToolCall
from relay_providers.openai import OpenAIProvider
from relay_providers.tests.streaming.helpers import drain, openai_sse, sse_client, texts


def _delta(content=None, *, tool_calls=None, finish=None, usage=None):
    delta = {}
    if content is not None:
        delta["content"] = content
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls
    chunk = {"choices": [{"index": 0, "delta": delta, "finish_reason": finish}]}
    if usage is not None:
        chunk["usage"] = usage
    return chunk


def _open(body, **kwargs):
    client, rec, stream = sse_client(body, **kwargs)
    provider = OpenAIProvider(api_key="k", http_client=client)
    request = ChatRequest(model="gpt-test", messages=[Message(role="user", content="hi")])
    return provider.call_stream(request), rec, stream


def test_text_deltas_and_final_response():
    body = openai_sse(_delta("Hel"), _delta("lo"), _delta(finish="stop"))
    s, rec, raw = _open(body)
    chunks, err = drain(s)
    assert err is None
    assert texts(chunks) == ["Hel", "lo"]
    assert chunks[-1].finish_reason is FinishReason.STOP
    assert all(c.finish_reason is None for c in chunks[:-1])
    resp = s.response()
    assert resp.text == "Hello"
    assert resp.finish_reason is FinishReason.STOP
    assert raw.close_calls == 1
    assert rec.last_json()["stream"] is True
    assert rec.last.headers["Accept"] == "text/event-stream"


def test_finish_reason_rides_on_final_text_chunk():
    s, _, _ = _open(openai_sse(_delta("a"), _delta("b", finish="length")))
    chunks, _ = drain(s)
    assert [(c.text, c.finish_reason) for c in chunks] == [("a", None), ("b", FinishReason.LENGTH)]


@pytest.mark.parametrize("size", [1, 3, 7, 64])
def test_byte_chunking_does_not_change_output(size):
    body = openai_sse(_delta("Hel"), _delta("lo"), _delta(finish="stop"))
    s, _, raw = _open(body, chunk_size=size)
    chunks, err = drain(s)
    assert err is None
    assert texts(chunks) == ["Hel", "lo"]
    assert raw.close_calls == 1


def test_fragmented_tool_call_arguments():
    body = openai_sse(
        _delta(tool_calls=[{"index": 0, "id": "call_1", "type": "function", "function": {"name": "weather", "arguments": ""}}]),
        _delta(tool_calls=[{"index": 0, "function": {"arguments": '{"ci'}}]),
        _delta(tool_calls=[{"index": 0, "function": {"arguments": 'ty":"Oslo"}'}}]),
        _delta(finish="tool_calls"),
    )
    s, _, _ = _open(body)
    chunks, err = drain(s)
    assert err is None
    deltas = [c.tool_call for c in chunks if c.tool_call is not None]
    assert deltas[0].id == "call_1" and deltas[0].name == "weather" and deltas[0].arguments == ""
    assert "".join(d.arguments for d in deltas) == '{"city":"Oslo"}'
    assert all(d.index == 0 for d in deltas)
    resp = s.response()
    assert resp.finish_reason is FinishReason.TOOL_CALLS
    assert resp.tool_calls == [ToolCall(id="call_1", name="weather", arguments='{"city":"Oslo"}')]


def test_parallel_tool_calls_keep_first_observed_order():
    body = openai_sse(
        _delta(tool_calls=[{"index": 1, "id": "b", "function": {"name": "second", "arguments": "{}"}}]),
        _delta(tool_calls=[{"index": 0, "id": "a", "function": {"name": "first", "arguments": "{}"}}]),
        _delta(finish="tool_calls"),
    )
    s, _, _ = _open(body)
    drain(s)
    assert [tc.id for tc in s.response().tool_calls] == ["b", "a"]


def test_usage_chunk_after_finish_is_recorded():
    body = openai_sse(
        _delta("hi", finish="stop"),
        {"choices": [], "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4}},
    )
    s, _, _ = _open(body)
    chunks, err = drain(s)
    assert err is None
    assert len(chunks) == 1
    assert s.response().usage.total_tokens == 4


def test_eof_without_done_flushes_pending_tool_calls():
    body = openai_sse(
        _delta(tool_calls=[{"index": 0, "id": "c", "function": {"name": "f", "arguments": '{"a":1}'}}]),
        done=False,
    )
    s, _, raw = _open(body)
    _, err = drain(s)
    assert err is None
    assert s.response().tool_calls == [ToolCall(id="c", name="f", arguments='{"a":1}')]
    assert raw.close_calls == 1


def test_nothing_after_done_is_read():
    body = openai_sse(_delta("one")) + b"data: {\"choices\": [{\"delta\": {\"content\": \"late\"}}]}\n\n"
    s, _, _ = _open(body)
    chunks, _ = drain(s)
    assert texts(chunks) == ["one"]


def test_comments_and_blank_data_are_ignored():
    body = b": keep-alive\n\n" + openai_sse(_delta("x"))
    s, _, _ = _open(body)
    chunks, err = drain(s)
    assert err is None
    assert texts(chunks) == ["x"]


def test_malformed_event_is_decode_error():
    body = openai_sse(_delta("ok"), done=False) + b"data: {broken\n\n" + openai_sse(_delta("never"))
    s, _, raw = _open(body)
    chunks, err = drain(s)
    assert texts(chunks) == ["ok"]
    assert isinstance(err, DecodeError)
    assert err.body == "{broken"
    assert raw.close_calls == 1
    assert s.next() is False


def test_in_stream_error_event():
    body = openai_sse(_delta("partial"), done=False) + b'data: {"error": {"message": "server overloaded", "type": "server_error"}}\n\n'
    s, _, _ = _open(body)
    chunks, err = drain(s)
    assert texts(chunks) == ["partial"]
    assert isinstance(err, APIError)
    assert err.message == "server overloaded"
    assert err.status_code is None


def test_error_keeps_pending_tool_calls_unflushed():
    body = openai_sse(
        _delta(tool_calls=[{"index": 0, "id": "c", "function": {"name": "f", "arguments": '{"a":'}}]),
        done=False,
    ) + b"data: not-json\n\n"
    s, _, _ = _open(body)
    _, err = drain(s)
    assert isinstance(err, DecodeError)
    assert s.response().tool_calls == []


def test_connection_reset_mid_body():
    body = openai_sse(_delta("a"), _delta("b"), _delta("c"))
    first_event = len(openai_sse(_delta("a"), done=False))
    s, _, raw = _open(body, chunk_size=first_event, fail_after=1)
    chunks, err = drain(s)
    assert texts(chunks) == ["a"]
    assert isinstance(err, TransportError)
    assert err.code is ErrorCode.TRANSIENT
    assert err.phase == "stream"
    assert raw.close_calls == 1


def test_http_error_status_raises_before_streaming():
    client, _, raw = sse_client(b'{"error": {"message": "bad key", "type": "auth"}}', status=401)
    provider = OpenAIProvider(api_key="k", http_client=client)
    with pytest.raises(APIError) as info:
        provider.call_stream(ChatRequest(model="m", messages=[Message(role="user", content="x")]))
    assert info.value.code is ErrorCode.AUTH
    assert info.value.message == "bad key"
    assert raw.close_calls == 1


def test_unexpected_chunk_shape_is_decode_error():
    body = openai_sse(_delta("ok"), {"choices": ["x"]}, _delta("never"))
    s, _, raw = _open(body)
    chunks, err = drain(s)
    assert texts(chunks) == ["ok"]
    assert isinstance(err, DecodeError)
    assert isinstance(err.raw, AttributeError)
    assert err.body == '{"choices": ["x"]}'
    assert raw.close_calls == 1
    assert s.next() is False
