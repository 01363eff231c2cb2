"""Anthropic streaming normalizer (typed ``event:``/``data:`` pairs).

Event handling:
- ``message_start``: prompt usage from ``message.usage``.
- ``content_block_start``: a ``tool_use`` block opens an in-progress call
  keyed by block-start order and surfaces a delta carrying its id and name.
- ``content_block_delta``: ``text_delta`` text, or ``input_json_delta``
  ``partial_json`` fragments appended verbatim to the block's call.
- ``content_block_stop``: a non-empty ``input`` given at block start becomes
  the arguments only if no ``partial_json`` fragment arrived for the block,
  so the two sources are never concatenated.
- ``message_delta``: ``stop_reason`` and cumulative ``output_tokens``.
- ``message_stop``: terminal signal.
- ``ping`` and unknown events are ignored; ``error`` ends the stream with an
  ``APIError``.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

from ..base.errors import APIError
from ..base.models import StreamChunk
from ..base.streaming import BaseStreamNormalizer, SSEEvent
from .helpers import convert_stop_reason, parse_error_envelope


class AnthropicStreamNormalizer(BaseStreamNormalizer):
    """Framing C: typed events ending with ``message_stop``."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        # content block index -> tool-call key (block-start order)
        self._block_keys: Dict[int, int] = {}
        # tool-call key -> arguments from a non-empty start ``input``, used
        # only when no ``partial_json`` delta follows for that block
        self._seeds: Dict[int, str] = {}
        self._handlers: Dict[str, Callable[[Dict[str, Any]], List[StreamChunk]]] = {
            "error": self._on_error,
            "message_start": self._on_message_start,
            "content_block_start": self._on_content_block_start,
            "content_block_delta": self._on_content_block_delta,
            "content_block_stop": self._on_content_block_stop,
            "message_delta": self._on_message_delta,
            "message_stop": self._on_message_stop,
        }

    def _handle_event(self, event: SSEEvent) -> List[StreamChunk]:
        payload = self._decode(event.data)
        if not isinstance(payload, dict):
            return []
        kind = payload.get("type") or event.event
        handler = self._handlers.get(kind or "")
        if handler is None:
            return []
        return handler(payload)

    def _tool_key(self, index: int) -> int:
        key = self._block_keys.get(index)
        if key is None:
            key = len(self._block_keys)
            self._block_keys[index] = key
        return key

    def _on_error(self, payload: Dict[str, Any]) -> List[StreamChunk]:
        details = parse_error_envelope(payload)
        raise APIError(
            (details.message if details else "") or "stream error",
            provider=self._provider,
            model=self._model,
            error_type=details.error_type if details else None,
            body=json.dumps(payload),
        )

    def _on_message_start(self, payload: Dict[str, Any]) -> List[StreamChunk]:
        usage = (payload.get("message") or {}).get("usage")
        if isinstance(usage, dict):
            self._acc.set_usage(prompt=usage.get("input_tokens"), completion=usage.get("output_tokens"))
        return []

    def _on_content_block_start(self, payload: Dict[str, Any]) -> List[StreamChunk]:
        block = payload.get("content_block") or {}
        if block.get("type") == "text" and block.get("text"):
            self._acc.add_text(block["text"])
            return [StreamChunk(text=block["text"])]
        if block.get("type") != "tool_use":
            return []
        key = self._tool_key(payload.get("index", 0))
        initial = block.get("input")
        if initial:
            self._seeds[key] = json.dumps(initial, ensure_ascii=False)
        delta = self._acc.add_tool_fragment(key, call_id=block.get("id"), name=block.get("name"))
        return [StreamChunk(tool_call=delta)]

    def _on_content_block_delta(self, payload: Dict[str, Any]) -> List[StreamChunk]:
        delta = payload.get("delta") or {}
        kind = delta.get("type")
        if kind == "text_delta":
            text = delta.get("text") or ""
            if not text:
                return []
            self._acc.add_text(text)
            return [StreamChunk(text=text)]
        if kind == "input_json_delta":
            fragment = delta.get("partial_json") or ""
            if not fragment:
                return []
            key = self._tool_key(payload.get("index", 0))
            self._seeds.pop(key, None)
            tool_delta = self._acc.add_tool_fragment(key, fragment=fragment)
            return [StreamChunk(tool_call=tool_delta)]
        return []

    def _on_content_block_stop(self, payload: Dict[str, Any]) -> List[StreamChunk]:
        key = self._block_keys.get(payload.get("index", 0))
        if key is None:
            return []
        return self._flush_seed(key)

    def _flush_seed(self, key: int) -> List[StreamChunk]:
        seed = self._seeds.pop(key, None)
        if seed is None:
            return []
        return [StreamChunk(tool_call=self._acc.add_tool_fragment(key, fragment=seed))]

    def _before_finalize(self) -> None:
        for key in sorted(self._seeds):
            self._flush_seed(key)

    def _on_message_delta(self, payload: Dict[str, Any]) -> List[StreamChunk]:
        usage = payload.get("usage")
        if isinstance(usage, dict):
            self._acc.set_usage(prompt=usage.get("input_tokens"), completion=usage.get("output_tokens"))
        stop_reason = (payload.get("delta") or {}).get("stop_reason")
        if not stop_reason:
            return []
        reason = convert_stop_reason(stop_reason)
        self._acc.set_finish_reason(reason)
        return self._with_finish([], reason)

    def _on_message_stop(self, payload: Dict[str, Any]) -> List[StreamChunk]:
        chunks: List[StreamChunk] = []
        for key in sorted(self._seeds):
            chunks.extend(self._flush_seed(key))
        self._mark_terminal()
        return chunks


__all__ = ["AnthropicStreamNormalizer"]
