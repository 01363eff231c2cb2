"""Non-streaming tests for the Gemini generateContent adapter."""

from __future__ import annotations

import json

import pytest

from relay_providers.base.errors import APIError, ConfigurationError, ErrorCode
from relay_providers.base.models import (
    ChatRequest,
    FinishReason,
    JSONSchemaSpec,
    Message,
    ToolCall,
    ToolDefinition,
)
from relay_providers.gemini import GeminiProvider
from relay_providers.tests.streaming.helpers import json_client

GENERATED = {
    "candidates": [
        {
            "content": {"role": "model", "parts": [{"text": "Hel"}, {"text": "lo"}]},
            "finishReason": "STOP",
        }
    ],
    "usageMetadata": {"promptTokenCount": 4, "candidatesTokenCount": 2, "totalTokenCount": 6},
}


def _request(**kwargs) -> ChatRequest:
    kwargs.setdefault("model", "gemini-test")
    kwargs.setdefault("messages", [Message(role="user", content="hi")])
    return ChatRequest(**kwargs)


def test_endpoint_and_auth_header():
    client, rec = json_client(GENERATED)
    GeminiProvider(api_key="g-key", http_client=client).call(_request())
    req = rec.last
    assert str(req.url) == "https://generativelanguage.googleapis.com/v1beta/models/gemini-test:generateContent"
    assert req.headers["x-goog-api-key"] == "g-key"
    assert "authorization" not in req.headers


def test_models_prefix_is_accepted():
    client, rec = json_client(GENERATED)
    GeminiProvider(api_key="k", http_client=client).call(_request(model="models/gemini-x"))
    assert rec.last.url.path == "/v1beta/models/gemini-x:generateContent"


def test_payload_mapping():
    client, rec = json_client(GENERATED)
    GeminiProvider(api_key="k", http_client=client).call(
        _request(
            messages=[
                Message(role="system", content="rule one"),
                Message(role="system", content="rule two"),
                Message(role="user", content="weather?"),
                Message(role="assistant", content="checking", tool_calls=[ToolCall(id="w1", name="weather", arguments='{"city":"Oslo"}')]),
                Message(role="tool", content='{"temp": 3}', tool_call_id="w1"),
                Message(role="tool", content="plain text", tool_call_id="w2"),
                Message(role="assistant", content=""),
            ],
            temperature=0.5,
            max_tokens=64,
            top_p=0.8,
            top_k=20,
            stop_sequences=["STOP"],
            tools=[ToolDefinition(name="weather", description="Weather", parameters={"type": "object"})],
            json_schema=JSONSchemaSpec(name="W", schema={"type": "object"}),
        )
    )
    body = rec.last_json()
    assert body["systemInstruction"] == {"parts": [{"text": "rule one\n\nrule two"}]}
    assert body["contents"] == [
        {"role": "user", "parts": [{"text": "weather?"}]},
        {"role": "model", "parts": [{"functionCall": {"name": "weather", "args": {"city": "Oslo"}}}, {"text": "checking"}]},
        {"role": "user", "parts": [{"functionResponse": {"name": "w1", "response": {"temp": 3}}}]},
        {"role": "user", "parts": [{"functionResponse": {"name": "w2", "response": {"result": "plain text"}}}]},
    ]
    assert body["generationConfig"] == {
        "temperature": 0.5,
        "maxOutputTokens": 64,
        "topP": 0.8,
        "topK": 20,
        "stopSequences": ["STOP"],
        "responseMimeType": "application/json",
        "responseSchema": {"type": "object"},
    }
    assert body["tools"] == [
        {"functionDeclarations": [{"name": "weather", "description": "Weather", "parameters": {"type": "object"}}]}
    ]


def test_generation_config_omitted_when_empty():
    client, rec = json_client(GENERATED)
    GeminiProvider(api_key="k", http_client=client).call(_request())
    body = rec.last_json()
    assert set(body) == {"contents"}


def test_response_conversion():
    client, _ = json_client(GENERATED)
    resp = GeminiProvider(api_key="k", http_client=client).call(_request())
    assert resp.text == "Hello"
    assert resp.finish_reason is FinishReason.STOP
    assert resp.usage.total_tokens == 6


def test_function_calls_report_tool_calls_even_with_stop():
    body = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"functionCall": {"name": "weather", "args": {"city": "Oslo"}}},
                        {"functionCall": {"id": "fc-2", "name": "time", "args": {}}},
                    ]
                },
                "finishReason": "STOP",
            }
        ]
    }
    client, _ = json_client(body)
    resp = GeminiProvider(api_key="k", http_client=client).call(_request())
    assert resp.finish_reason is FinishReason.TOOL_CALLS
    assert resp.tool_calls[0].id == "weather"
    assert json.loads(resp.tool_calls[0].arguments) == {"city": "Oslo"}
    assert resp.tool_calls[1].id == "fc-2"
    assert resp.tool_calls[1].arguments == "{}"


@pytest.mark.parametrize(
    "vendor, expected",
    [
        ("MAX_TOKENS", FinishReason.LENGTH),
        ("SAFETY", FinishReason.STOP),
        ("FUNCTION_CALL", FinishReason.TOOL_CALLS),
    ],
)
def test_finish_reason_mapping(vendor, expected):
    body = {"candidates": [{"content": {"parts": [{"text": "x"}]}, "finishReason": vendor}]}
    client, _ = json_client(body)
    assert GeminiProvider(api_key="k", http_client=client).call(_request()).finish_reason is expected


def test_missing_total_is_derived():
    body = {"candidates": [], "usageMetadata": {"promptTokenCount": 3, "candidatesTokenCount": 4}}
    client, _ = json_client(body)
    resp = GeminiProvider(api_key="k", http_client=client).call(_request())
    assert resp.text == ""
    assert resp.usage.total_tokens == 7


def test_error_envelope():
    envelope = {"error": {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}}
    client, _ = json_client(envelope, status=400)
    with pytest.raises(APIError) as info:
        GeminiProvider(api_key="k", http_client=client).call(_request())
    err = info.value
    assert err.message == "API key not valid"
    assert err.error_type == "INVALID_ARGUMENT"
    assert err.error_code == "400"
    assert err.code is ErrorCode.VALIDATION


def test_google_api_key_alias(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "alias-key")
    client, rec = json_client(GENERATED)
    GeminiProvider(http_client=client).call(_request())
    assert rec.last.headers["x-goog-api-key"] == "alias-key"


def test_missing_key_names_env_var():
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        GeminiProvider()
