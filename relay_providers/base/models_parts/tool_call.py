"""
ToolCall DTO: a model-requested invocation of a caller-supplied function.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ToolCall:
    """A completed tool call.

    Attributes:
        id: Vendor-assigned call identifier; echoed back on the ``tool``
            message that answers it.
        name: Name of the tool the model wants to run.
        arguments: JSON-encoded argument object. Not validated against the
            tool schema here.
    """

    id: str
    name: str
    arguments: str = "{}"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the call."""
        return {"id": self.id, "name": self.name, "arguments": self.arguments}


__all__ = ["ToolCall"]
