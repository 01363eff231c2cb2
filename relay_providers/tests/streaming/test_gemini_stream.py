"""Gemini streaming normalizer behaviour over canned SSE bodies."""

from __future__ import annotations

import json

import pytest

from relay_providers.base.errors import APIError, DecodeError
from relay_providers.base.models import ChatRequest, FinishReason, Message
from relay_providers.gemini import GeminiProvider
from relay_providers.tests.streaming.helpers import drain, gemini_sse, sse_client, texts


def _record(*parts, finish=None, usage=None):
    candidate = {"content": {"role": "model", "parts": list(parts)}}
    if finish:
        candidate["finishReason"] = finish
    record = {"candidates": [candidate]}
    if usage:
        record["usageMetadata"] = usage
    return record


def _open(body, **kwargs):
    client, rec, stream = sse_client(body, **kwargs)
    provider = GeminiProvider(api_key="k", http_client=client)
    request = ChatRequest(model="gemini-test", messages=[Message(role="user", content="hi")])
    return provider.call_stream(request), rec, stream


def test_stream_endpoint_uses_sse_alt():
    s, rec, _ = _open(gemini_sse(_record({"text": "x"}, finish="STOP")))
    drain(s)
    url = rec.last.url
    assert url.path == "/v1beta/models/gemini-test:streamGenerateContent"
    assert url.params["alt"] == "sse"


@pytest.mark.parametrize("size", [None, 1, 5])
def test_text_deltas_with_crlf_framing(size):
    body = gemini_sse(
        _record({"text": "Hel"}),
        _record({"text": "lo"}, finish="STOP", usage={"promptTokenCount": 2, "candidatesTokenCount": 2, "totalTokenCount": 4}),
    )
    s, _, raw = _open(body, chunk_size=size)
    chunks, err = drain(s)
    assert err is None
    assert texts(chunks) == ["Hel", "lo"]
    assert chunks[-1].finish_reason is FinishReason.STOP
    resp = s.response()
    assert resp.text == "Hello"
    assert resp.usage.total_tokens == 4
    assert raw.close_calls == 1


def test_whole_function_calls_get_arrival_indices():
    body = gemini_sse(
        _record({"functionCall": {"name": "weather", "args": {"city": "Oslo"}}}),
        _record({"functionCall": {"name": "weather", "args": {"city": "Rome"}}}, finish="STOP"),
    )
    s, _, _ = _open(body)
    chunks, err = drain(s)
    assert err is None
    deltas = [c.tool_call for c in chunks if c.tool_call]
    assert [d.index for d in deltas] == [0, 1]
    resp = s.response()
    assert resp.finish_reason is FinishReason.TOOL_CALLS
    assert [json.loads(tc.arguments)["city"] for tc in resp.tool_calls] == ["Oslo", "Rome"]
    assert [tc.id for tc in resp.tool_calls] == ["weather", "weather"]


def test_finish_reason_terminates_stream():
    body = gemini_sse(_record({"text": "done"}, finish="MAX_TOKENS"), _record({"text": "ignored"}))
    s, _, _ = _open(body)
    chunks, _ = drain(s)
    assert texts(chunks) == ["done"]
    assert s.response().finish_reason is FinishReason.LENGTH


def test_eof_without_finish_reason_finalizes():
    s, _, raw = _open(gemini_sse(_record({"text": "cut"})))
    chunks, err = drain(s)
    assert err is None
    assert texts(chunks) == ["cut"]
    assert s.response().finish_reason is FinishReason.STOP
    assert raw.close_calls == 1


def test_error_record_mid_stream():
    body = gemini_sse(_record({"text": "a"}), {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}})
    s, _, _ = _open(body)
    chunks, err = drain(s)
    assert texts(chunks) == ["a"]
    assert isinstance(err, APIError)
    assert err.error_type == "UNAVAILABLE"
    assert err.error_code == "503"


def test_malformed_record_is_decode_error():
    body = gemini_sse(_record({"text": "a"})) + b"data: {nope\r\n\r\n"
    s, _, raw = _open(body)
    _, err = drain(s)
    assert isinstance(err, DecodeError)
    assert raw.close_calls == 1


def test_unexpected_part_shape_is_decode_error():
    body = gemini_sse(_record({"text": "ok"}), {"candidates": [{"content": {"parts": ["x"]}}]})
    s, _, raw = _open(body)
    chunks, err = drain(s)
    assert texts(chunks) == ["ok"]
    assert isinstance(err, DecodeError)
    assert raw.close_calls == 1
    assert s.next() is False
    assert s.response().text == "ok"
