"""Base streaming normalizer: the pull-based SSE state machine.

Purpose
-------
``BaseStreamNormalizer`` wraps an open ``httpx.Response`` carrying
Server-Sent Events and exposes the pull contract ``next`` / ``current`` /
``err`` / ``close`` plus ``response()`` for the accumulated result. Vendor
subclasses implement a single hook, ``_handle_event``, that folds one parsed
SSE event into the shared ``StreamAccumulator`` and returns the chunks to
surface.

Lifecycle
---------
- ``next()`` reads lines only when the consumer asks; one vendor event may
  yield several chunks, which are handed out one per call before the next
  network read.
- A vendor terminal signal (``_mark_terminal``) or a transport EOF finalizes
  the accumulator (tool calls flushed in first-observed order) and closes the
  body.
- Any failure (transport, decode, in-stream vendor error, cancellation)
  stores a ``ProviderError`` for ``err()``, closes the body and makes every
  later ``next()`` return False without touching the network. Chunks already
  delivered stay valid; in-progress tool calls are not flushed.
- The response body is closed exactly once on every exit path.

Cancellation
------------
When a ``CancellationToken`` is supplied, cancelling it closes the body from
the cancelling thread so a ``next()`` blocked on a read returns, and the
stream reports ``TransportError(code=cancelled, phase=stream)``.
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Deque, List, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import SHAPE_ERRORS, DecodeError, ErrorCode, ProviderError
from ..http.transport import decode_json, transport_error
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatResponse, FinishReason, StreamChunk
from .accumulator import StreamAccumulator
from .sse import SSEEvent, iter_sse_events
from .streaming_metrics import StreamMetrics


class BaseStreamNormalizer:
    """Pull-based normalizer shared by every vendor framing."""

    def __init__(
        self,
        response: httpx.Response,
        *,
        provider: str,
        model: Optional[str],
        token: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._response = response
        self._provider = provider
        self._model = model
        self._token = token
        self._logger = logger or get_logger(f"relay.{provider}")
        self._ctx = LogContext(provider=provider, model=model).bind(operation="stream")
        self._events = iter_sse_events(response.iter_lines())
        self._acc = StreamAccumulator()
        self._queue: Deque[StreamChunk] = deque()
        self._current = StreamChunk()
        self._err: Optional[ProviderError] = None
        self._terminal = False
        self._done = False
        self._closed = False
        self._close_lock = threading.Lock()
        self._metrics = StreamMetrics()
        self._cancel_handle: Optional[int] = None
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start", emitted=None, tokens=None)
        if token is not None:
            self._cancel_handle = token.add_callback(self._release_body)

    # ------------------------------------------------------------------
    # Pull contract

    def next(self) -> bool:
        """Advance to the next chunk; False at end-of-stream or on error."""
        if self._done:
            return False
        if self._queue:
            return self._emit(self._queue.popleft())
        if self._terminal:
            self._finish()
            return False
        while True:
            if self._token is not None and self._token.cancelled:
                self._fail(self._cancelled_error())
                return False
            try:
                event = next(self._events)
            except StopIteration:
                self._finish()
                return False
            except (httpx.HTTPError, httpx.StreamError) as exc:
                self._fail(transport_error(exc, token=self._token, provider=self._provider, model=self._model, phase="stream"))
                return False
            try:
                chunks = self._handle_event(event)
            except ProviderError as exc:
                self._fail(exc)
                return False
            except SHAPE_ERRORS as exc:
                self._fail(
                    DecodeError(
                        f"unexpected stream event shape: {exc}",
                        provider=self._provider,
                        model=self._model,
                        body=event.data,
                        raw=exc,
                    )
                )
                return False
            self._queue.extend(chunk for chunk in chunks if not chunk.is_empty)
            if self._queue:
                return self._emit(self._queue.popleft())
            if self._terminal:
                self._finish()
                return False

    def current(self) -> StreamChunk:
        """Return the chunk produced by the last successful ``next()``."""
        return self._current

    def err(self) -> Optional[ProviderError]:
        """Return the error that ended the stream, if any."""
        return self._err

    def close(self) -> None:
        """Stop the stream and release the response body (idempotent)."""
        if not self._done:
            self._done = True
            self._metrics.finish()
            normalized_log_event(
                self._logger,
                "stream.end",
                self._ctx,
                phase="finalize",
                emitted=self._metrics.emitted > 0,
                tokens=self._acc.usage(),
                closed_early=True,
                **self._metrics.to_log_fields(),
            )
        self._release_body()

    def response(self) -> ChatResponse:
        """Return the accumulated response (final once ``next()`` returned False)."""
        return self._acc.snapshot()

    @property
    def done(self) -> bool:
        return self._done

    # ------------------------------------------------------------------
    # Vendor hook and helpers

    def _handle_event(self, event: SSEEvent) -> List[StreamChunk]:  # pragma: no cover - abstract
        """Fold one SSE event into the accumulator and return chunks to surface."""
        raise NotImplementedError

    def _decode(self, data: str) -> Any:
        return decode_json(data, provider=self._provider, model=self._model, context="stream event")

    def _before_finalize(self) -> None:
        """Hook for vendors holding state that must reach the accumulator at the end."""

    def _mark_terminal(self) -> None:
        """Record the vendor's terminal signal; the stream ends after queued chunks."""
        self._terminal = True

    @staticmethod
    def _with_finish(chunks: List[StreamChunk], reason: Optional[FinishReason]) -> List[StreamChunk]:
        """Attach ``reason`` to the last chunk (or to a new empty chunk)."""
        if reason is None:
            return chunks
        if chunks:
            last = chunks[-1]
            chunks[-1] = StreamChunk(text=last.text, tool_call=last.tool_call, finish_reason=reason)
        else:
            chunks.append(StreamChunk(finish_reason=reason))
        return chunks

    # ------------------------------------------------------------------
    # Internal state transitions

    def _emit(self, chunk: StreamChunk) -> bool:
        self._current = chunk
        self._metrics.mark_emitted()
        return True

    def _cancelled_error(self) -> ProviderError:
        reason = self._token.reason if self._token is not None else None
        return transport_error(
            CancelledError(reason),
            token=self._token,
            provider=self._provider,
            model=self._model,
            phase="stream",
        )

    def _finish(self) -> None:
        self._before_finalize()
        self._acc.finalize()
        self._done = True
        self._release_body()
        self._metrics.finish()
        normalized_log_event(
            self._logger,
            "stream.end",
            self._ctx,
            phase="finalize",
            emitted=self._metrics.emitted > 0,
            tokens=self._acc.usage(),
            finish_reason=(self._acc.finish_reason or FinishReason.STOP).value,
            tool_calls=len(self._acc.snapshot().tool_calls),
            **self._metrics.to_log_fields(),
        )

    def _fail(self, error: ProviderError) -> None:
        if self._token is not None and self._token.cancelled and error.code is not ErrorCode.CANCELLED:
            error = self._cancelled_error()
        self._err = error
        self._done = True
        self._release_body()
        self._metrics.finish()
        normalized_log_event(
            self._logger,
            "stream.error",
            self._ctx,
            phase="finalize",
            emitted=self._metrics.emitted > 0,
            tokens=self._acc.usage(),
            **error.log_fields(),
            **self._metrics.to_log_fields(),
        )

    def _release_body(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        if self._token is not None and self._cancel_handle is not None:
            self._token.remove_callback(self._cancel_handle)
        self._response.close()


__all__ = ["BaseStreamNormalizer"]
