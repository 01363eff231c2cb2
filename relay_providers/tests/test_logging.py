"""Structured logging helpers."""

from __future__ import annotations

import json
import logging

from relay_providers.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from relay_providers.base.log_support import JsonFormatter
from relay_providers.base.models import ChatRequest, Message, Usage
from relay_providers.mock import MockProvider


def test_child_loggers_propagate_to_base():
    base = get_logger()
    child = get_logger("relay.test")
    assert base.name == BASE_LOGGER_NAME
    assert base.propagate is False
    assert child.propagate is True
    assert len(base.handlers) >= 1


def test_log_event_drops_none_fields(log_capture):
    log_event(get_logger("relay.test"), "demo", LogContext(provider="p", model=None), kept=1, dropped=None)
    event = log_capture[-1]
    assert event["event"] == "demo"
    assert event["provider"] == "p"
    assert event["kept"] == 1
    assert "dropped" not in event
    assert "model" not in event


def test_normalized_event_has_canonical_keys(log_capture):
    normalized_log_event(
        get_logger("relay.test"),
        "stream.end",
        LogContext(provider="p", model="m"),
        phase="finalize",
        emitted=True,
        tokens=Usage(prompt_tokens=1, completion_tokens=2, total_tokens=3),
        error_code="timeout",
        extra_field="x",
    )
    event = log_capture[-1]
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event
    assert event["structured"] is True
    assert event["tokens"] == {"prompt": 1, "completion": 2, "total": 3}
    assert event["error_code"] == "timeout"
    assert event["extra_field"] == "x"


def test_context_extra_is_merged():
    ctx = LogContext(provider="p", extra={"request_id_hint": "r1", "skip": None})
    assert ctx.to_dict() == {"provider": "p", "request_id_hint": "r1"}


def test_json_formatter_hoists_message_keys():
    record = logging.LogRecord("relay.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 2}), None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "e"
    assert line["n"] == 2
    assert line["logger"] == "relay.x"
    assert line["level"] == "INFO"
    assert "msg" not in line


def test_json_formatter_plain_message():
    record = logging.LogRecord("relay.x", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
    line = json.loads(JsonFormatter().format(record))
    assert line["msg"] == "hello world"


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "relay.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(get_logger("relay.file"), "to.file", value=1)
        for handler in logger.handlers:
            handler.flush()
        content = path.read_text(encoding="utf-8")
        assert '"event": "to.file"' in content
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)


def test_no_secret_in_adapter_logs(log_capture):
    import httpx

    from relay_providers.base.models import ChatRequest, Message
    from relay_providers.anthropic import AnthropicProvider

    body = {"content": [{"type": "text", "text": "ok"}], "stop_reason": "end_turn"}
    client = httpx.Client(transport=httpx.MockTransport(lambda req: httpx.Response(200, json=body)))
    AnthropicProvider(api_key="sk-ant-very-secret", http_client=client).call(
        ChatRequest(model="claude-test", messages=[Message(role="user", content="hi")])
    )
    assert log_capture
    assert all("sk-ant-very-secret" not in json.dumps(e) for e in log_capture)


def test_bound_context_keeps_original():
    base = LogContext(provider="p", model="m")
    bound = base.bind(operation="stream")
    assert bound.to_dict() == {"provider": "p", "model": "m", "operation": "stream"}
    assert base.to_dict() == {"provider": "p", "model": "m"}


def test_adapter_logs_carry_operation(log_capture):
    MockProvider().call(ChatRequest(model="m", messages=[Message(role="user", content="hi")]))
    start = next(e for e in log_capture if e.get("event") == "chat.start")
    assert start["operation"] == "chat"
