"""Accumulated state of one in-flight stream.

``StreamAccumulator`` owns the running text, the in-progress tool calls and
the running usage for exactly one stream. Normalizers feed it event by event
and read the final ``ChatResponse`` from it.

Rules
-----
- Text deltas are appended in arrival order.
- Tool-call fragments are keyed by a vendor-specific stable key (the chunk
  index, or block-start order). An entry is created on first sight; later
  fragments are appended, never replacing earlier ones. ``id`` and ``name``
  are assigned once the vendor supplies them.
- Usage values overwrite the stored figure for each field that is present.
- ``finalize`` flushes in-progress calls into completed ``ToolCall`` objects
  in first-observed order. It is idempotent.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional

from ..models import ChatResponse, FinishReason, ToolCall, ToolCallDelta, Usage

EMPTY_ARGUMENTS = "{}"


@dataclass
class _PendingToolCall:
    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    fragments: List[str] = field(default_factory=list)

    def arguments(self) -> str:
        joined = "".join(self.fragments)
        return joined if joined.strip() else EMPTY_ARGUMENTS


class StreamAccumulator:
    """Running text, tool calls and usage for a single stream."""

    def __init__(self) -> None:
        self._text: List[str] = []
        self._pending: Dict[Hashable, _PendingToolCall] = {}
        self._tool_calls: List[ToolCall] = []
        self._usage = Usage()
        self._total_reported = False
        self._finish_reason: Optional[FinishReason] = None
        self._finalized = False

    @property
    def text(self) -> str:
        return "".join(self._text)

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def finish_reason(self) -> Optional[FinishReason]:
        return self._finish_reason

    def add_text(self, delta: str) -> None:
        if delta:
            self._text.append(delta)

    def has_tool_call(self, key: Hashable) -> bool:
        return key in self._pending

    def add_tool_fragment(
        self,
        key: Hashable,
        *,
        call_id: Optional[str] = None,
        name: Optional[str] = None,
        fragment: str = "",
    ) -> ToolCallDelta:
        """Record a tool-call fragment and return the delta to surface."""
        entry = self._pending.get(key)
        if entry is None:
            entry = _PendingToolCall(index=len(self._pending))
            self._pending[key] = entry
        if call_id:
            entry.id = call_id
        if name:
            entry.name = name
        if fragment:
            entry.fragments.append(fragment)
        return ToolCallDelta(index=entry.index, id=entry.id, name=entry.name, arguments=fragment)

    def set_usage(
        self,
        *,
        prompt: Optional[int] = None,
        completion: Optional[int] = None,
        total: Optional[int] = None,
    ) -> None:
        """Overwrite the usage fields that are present."""
        if prompt is not None:
            self._usage.prompt_tokens = int(prompt)
        if completion is not None:
            self._usage.completion_tokens = int(completion)
        if total is not None:
            self._usage.total_tokens = int(total)
            self._total_reported = True

    def usage(self) -> Usage:
        """Return a copy of the running usage.

        When the vendor never reported a total, it is derived from the prompt
        and completion figures.
        """
        total = self._usage.total_tokens
        if not self._total_reported:
            total = self._usage.prompt_tokens + self._usage.completion_tokens
        return Usage(
            prompt_tokens=self._usage.prompt_tokens,
            completion_tokens=self._usage.completion_tokens,
            total_tokens=total,
        )

    def set_finish_reason(self, reason: FinishReason) -> None:
        self._finish_reason = reason

    def finalize(self) -> None:
        """Flush in-progress tool calls, in first-observed order."""
        if self._finalized:
            return
        for entry in self._pending.values():
            self._tool_calls.append(
                ToolCall(
                    id=entry.id or entry.name or f"call_{entry.index}",
                    name=entry.name or "",
                    arguments=entry.arguments(),
                )
            )
        self._pending.clear()
        self._finalized = True

    def snapshot(self) -> ChatResponse:
        """Return the accumulated response as of now."""
        return ChatResponse(
            text=self.text,
            tool_calls=list(self._tool_calls),
            finish_reason=self._finish_reason or FinishReason.STOP,
            usage=self.usage(),
        )


__all__ = ["StreamAccumulator", "EMPTY_ARGUMENTS"]
