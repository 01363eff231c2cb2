"""Structured-output schema rewrite for the chat completions API.

Strict ``json_schema`` mode rejects any object schema whose ``required``
array is a strict subset of its ``properties``. ``make_all_properties_required``
returns a copy of a schema in which every object lists all of its properties
as required, recursively through nested object properties, array ``items``
and ``$defs``/``definitions`` (pydantic places nested models there).
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Mapping


def _is_object_schema(node: Mapping[str, Any]) -> bool:
    kind = node.get("type")
    if kind == "object" or "properties" in node:
        return True
    return isinstance(kind, list) and "object" in kind


def _visit(node: Any) -> None:
    if not isinstance(node, dict):
        return
    props = node.get("properties")
    if isinstance(props, dict):
        node["required"] = list(props.keys())
        for child in props.values():
            if isinstance(child, dict):
                if _is_object_schema(child):
                    _visit(child)
                _visit_items(child)
    _visit_items(node)
    for defs_key in ("$defs", "definitions"):
        defs = node.get(defs_key)
        if isinstance(defs, dict):
            for child in defs.values():
                _visit(child)


def _visit_items(node: Mapping[str, Any]) -> None:
    items = node.get("items")
    if isinstance(items, dict) and _is_object_schema(items):
        _visit(items)
    elif isinstance(items, list):
        for item in items:
            if isinstance(item, dict) and _is_object_schema(item):
                _visit(item)


def make_all_properties_required(schema: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a deep copy of ``schema`` with every property required.

    The input is never mutated. Non-object schemas are returned unchanged
    (as a copy).
    """
    result = copy.deepcopy(dict(schema))
    _visit(result)
    return result


__all__ = ["make_all_properties_required"]
