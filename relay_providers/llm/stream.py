"""High-level wrapper around ``ResponseStream``.

Iterating a ``Stream`` yields canonical ``StreamChunk`` values. Unlike the raw
facade it does not raise at the end of iteration: the error is kept on
``err`` so partial output can still be inspected, matching the pull
contract's ``next``/``err`` split.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Sequence

from ..base.errors import ProviderError
from ..base.models import Message, StreamChunk
from ..base.streaming import ResponseStream
from .response import Response, history_with_reply


class Stream:
    """Streaming result of ``call_stream`` / ``call_messages_stream``."""

    def __init__(
        self,
        stream: ResponseStream,
        *,
        request_messages: Sequence[Message] = (),
        resume_options: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._stream = stream
        self._request_messages = list(request_messages)
        self._resume_options = resume_options

    @property
    def raw(self) -> ResponseStream:
        return self._stream

    def __iter__(self) -> Iterator[StreamChunk]:
        while self._stream.next():
            yield self._stream.current()

    def chunks(self) -> Iterator[StreamChunk]:
        return iter(self)

    def text_deltas(self) -> Iterator[str]:
        """Yield only the non-empty text deltas."""
        for chunk in self:
            if chunk.text:
                yield chunk.text

    @property
    def err(self) -> Optional[ProviderError]:
        return self._stream.err()

    def close(self) -> None:
        self._stream.close()

    def cancel(self, reason: Optional[str] = None) -> None:
        self._stream.cancel(reason)

    def response(self) -> Response[str]:
        """Accumulated response with history; final once iteration has ended."""
        raw = self._stream.response()
        return Response(
            raw,
            messages=history_with_reply(self._request_messages, raw),
            resume_options=self._resume_options,
        )

    def __enter__(self) -> "Stream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["Stream"]
