"""Gemini streaming normalizer (``streamGenerateContent?alt=sse``).

Every ``data:`` event is a complete ``GenerateContentResponse`` fragment.
Text parts are deltas. Function calls arrive whole (never split), so each
one opens a new in-progress entry keyed by its arrival ordinal within the
stream and carries its full JSON arguments as the single fragment. The event
carrying ``candidates[0].finishReason`` is the terminal signal.
"""

from __future__ import annotations

from typing import List

from ..base.errors import APIError
from ..base.models import FinishReason, StreamChunk
from ..base.streaming import BaseStreamNormalizer, SSEEvent
from .helpers import convert_finish_reason, function_call_fields, parse_error_envelope, usage_fields


class GeminiStreamNormalizer(BaseStreamNormalizer):
    """Framing B: untyped ``data:`` events ended by a ``finishReason``."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._calls_seen = 0

    def _handle_event(self, event: SSEEvent) -> List[StreamChunk]:
        payload = self._decode(event.data)
        if not isinstance(payload, dict):
            return []
        details = parse_error_envelope(payload)
        if details is not None:
            raise APIError(
                details.message or "stream error",
                provider=self._provider,
                model=self._model,
                error_type=details.error_type,
                error_code=details.error_code,
                body=event.data,
            )

        usage = usage_fields(payload.get("usageMetadata"))
        if usage is not None:
            self._acc.set_usage(**usage)

        candidates = payload.get("candidates") or []
        if not candidates:
            return []
        candidate = candidates[0] or {}
        chunks: List[StreamChunk] = []
        for part in (candidate.get("content") or {}).get("parts") or []:
            text = part.get("text")
            if text:
                self._acc.add_text(text)
                chunks.append(StreamChunk(text=text))
            fields = function_call_fields(part)
            if fields is not None:
                key = self._calls_seen
                self._calls_seen += 1
                delta = self._acc.add_tool_fragment(
                    key,
                    call_id=fields["id"],
                    name=fields["name"],
                    fragment=fields["arguments"],
                )
                chunks.append(StreamChunk(tool_call=delta))

        if not candidate.get("finishReason"):
            return chunks
        reason = convert_finish_reason(candidate["finishReason"])
        if self._calls_seen and reason is FinishReason.STOP:
            reason = FinishReason.TOOL_CALLS
        self._acc.set_finish_reason(reason)
        self._mark_terminal()
        return self._with_finish(chunks, reason)


__all__ = ["GeminiStreamNormalizer"]
