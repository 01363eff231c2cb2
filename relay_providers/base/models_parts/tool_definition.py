"""
ToolDefinition DTO describing a function the model may call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ToolDefinition:
    """Vendor-neutral tool declaration.

    Attributes:
        name: Tool name the model uses when calling it.
        description: Natural-language description shown to the model.
        parameters: JSON Schema document for the argument object. Passed
            through to vendors untouched.
    """

    name: str
    description: str = ""
    parameters: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})


__all__ = ["ToolDefinition"]
