"""
ToolCallDelta DTO: one streamed fragment of a tool call.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ToolCallDelta:
    """Incremental tool-call update surfaced by a streaming normalizer.

    ``arguments`` is only the fragment delivered by this event, never the
    full argument string. Concatenating the fragments of one ``index`` in
    arrival order rebuilds the complete JSON arguments.

    Attributes:
        index: Position of the call among the calls of this stream, in the
            order they were first observed.
        id: Vendor call identifier, once the vendor has supplied it.
        name: Tool name, once the vendor has supplied it.
        arguments: Argument fragment (may be empty on the opening delta).
    """

    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    arguments: str = ""


__all__ = ["ToolCallDelta"]
