"""OpenAI streaming normalizer (``data:`` lines terminated by ``[DONE]``).

Each ``data:`` line carries one ``chat.completion.chunk`` object. Text arrives
in ``choices[0].delta.content``; tool calls arrive as
``choices[0].delta.tool_calls[]`` fragments keyed by their ``index``, with
``id`` and ``function.name`` on the first fragment only. ``finish_reason``
may be followed by a usage-only chunk, so only the ``[DONE]`` sentinel (or
EOF) ends the stream.
"""

from __future__ import annotations

from typing import List, Optional

from ..base.errors import APIError
from ..base.models import FinishReason, StreamChunk
from ..base.streaming import BaseStreamNormalizer, SSEEvent
from .helpers import convert_finish_reason, parse_error_envelope

DONE_SENTINEL = "[DONE]"


class OpenAIStreamNormalizer(BaseStreamNormalizer):
    """Framing A: untyped ``data:`` events and a ``[DONE]`` sentinel."""

    def _handle_event(self, event: SSEEvent) -> List[StreamChunk]:
        data = event.data.strip()
        if data == DONE_SENTINEL:
            self._mark_terminal()
            return []
        payload = self._decode(data)
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
                body=data,
            )

        usage = payload.get("usage")
        if isinstance(usage, dict):
            self._acc.set_usage(
                prompt=usage.get("prompt_tokens"),
                completion=usage.get("completion_tokens"),
                total=usage.get("total_tokens"),
            )

        chunks: List[StreamChunk] = []
        reason: Optional[FinishReason] = None
        choices = payload.get("choices") or []
        if choices:
            choice = choices[0] or {}
            delta = choice.get("delta") or {}
            content = delta.get("content")
            if content:
                self._acc.add_text(content)
                chunks.append(StreamChunk(text=content))
            for tc in delta.get("tool_calls") or []:
                function = tc.get("function") or {}
                tool_delta = self._acc.add_tool_fragment(
                    tc.get("index", 0),
                    call_id=tc.get("id"),
                    name=function.get("name"),
                    fragment=function.get("arguments") or "",
                )
                chunks.append(StreamChunk(tool_call=tool_delta))
            if choice.get("finish_reason"):
                reason = convert_finish_reason(choice["finish_reason"])
                self._acc.set_finish_reason(reason)
        return self._with_finish(chunks, reason)


__all__ = ["OpenAIStreamNormalizer", "DONE_SENTINEL"]
