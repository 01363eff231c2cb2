"""Tools, the tool registry and tool-call execution."""

from __future__ import annotations

import json

import pytest
from pydantic import BaseModel

from relay_providers import llm
from relay_providers.base.models import ToolCall, ToolDefinition


class Add(BaseModel):
    a: int
    b: int


def _adder() -> llm.FunctionTool:
    return llm.FunctionTool("add", "Add two integers", lambda p: p.a + p.b, Add)


def test_function_tool_schema_and_definition():
    tool = _adder()
    assert isinstance(tool, llm.Tool)
    params = tool.parameters()
    assert params["type"] == "object"
    assert set(params["required"]) == {"a", "b"}
    definition = tool.definition()
    assert isinstance(definition, ToolDefinition)
    assert (definition.name, definition.description) == ("add", "Add two integers")
    assert llm.tool_definition(tool) == definition


def test_function_tool_execute_and_typed_call():
    tool = _adder()
    assert tool.execute('{"a": 2, "b": 3}') == 5
    assert tool.typed_call(Add(a=1, b=1)) == 2


def test_function_tool_requires_name():
    with pytest.raises(ValueError):
        llm.FunctionTool("", "x", lambda p: None, Add)


def test_registry_basics():
    reg = llm.ToolRegistry([_adder()])
    assert "add" in reg
    assert len(reg) == 1
    assert reg.get("missing") is None
    replacement = llm.FunctionTool("add", "v2", lambda p: 0, Add)
    reg.register(replacement)
    assert reg.get("add") is replacement
    assert reg.all() == [replacement]


def test_execute_tool_calls_in_order():
    class Echo(BaseModel):
        text: str

    echo = llm.FunctionTool("echo", "Echo", lambda p: p.text, Echo)
    reg = llm.ToolRegistry([_adder(), echo])
    calls = [
        ToolCall(id="1", name="add", arguments='{"a": 1, "b": 2}'),
        ToolCall(id="2", name="echo", arguments='{"text": "hi"}'),
    ]
    out = llm.execute_tool_calls(calls, reg)
    assert [(m.role, m.tool_call_id, m.content) for m in out] == [("tool", "1", "3"), ("tool", "2", "hi")]


def test_model_results_are_serialized():
    class Out(BaseModel):
        total: int

    tool = llm.FunctionTool("sum", "Sum", lambda p: Out(total=p.a + p.b), Add)
    out = llm.execute_tool_calls([ToolCall(id="x", name="sum", arguments='{"a": 1, "b": 1}')], llm.ToolRegistry([tool]))
    assert json.loads(out[0].content) == {"total": 2}


def test_unserializable_result():
    tool = llm.FunctionTool("obj", "Obj", lambda p: object(), Add)
    out = llm.execute_tool_calls([ToolCall(id="x", name="obj", arguments='{"a": 1, "b": 1}')], llm.ToolRegistry([tool]))
    assert out[0].content.startswith("Error marshaling result:")


def test_tool_failure_becomes_error_content(log_capture):
    def fail(p):
        raise RuntimeError("database offline")

    tool = llm.FunctionTool("lookup", "Lookup", fail, Add)
    out = llm.execute_tool_calls([ToolCall(id="x", name="lookup", arguments='{"a": 1, "b": 1}')], llm.ToolRegistry([tool]))
    assert out[0].content == "Error: database offline"
    logged = [e for e in log_capture if e.get("event") == "tool.error"]
    assert logged and logged[0]["tool"] == "lookup"
    assert logged[0]["error_code"] == "unavailable"


def test_invalid_arguments_become_error_content():
    out = llm.execute_tool_calls([ToolCall(id="x", name="add", arguments='{"a": "nope"}')], llm.ToolRegistry([_adder()]))
    assert out[0].content.startswith("Error: ")


def test_unknown_tool_raises():
    with pytest.raises(llm.ToolNotFoundError) as info:
        llm.execute_tool_calls([ToolCall(id="x", name="ghost", arguments="{}")], llm.ToolRegistry())
    assert info.value.name == "ghost"
    assert str(info.value) == "tool not found: ghost"


def test_message_constructors():
    call = ToolCall(id="c", name="f", arguments="{}")
    assert llm.system_message("s").role == "system"
    assert llm.user_message("u").role == "user"
    assert llm.assistant_message("a").role == "assistant"
    turn = llm.assistant_message_with_tool_calls("", [call])
    assert turn.tool_calls == (call,)
    assert llm.tool_message("c", "42").tool_call_id == "c"
