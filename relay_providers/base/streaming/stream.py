"""ResponseStream facade over a vendor streaming normalizer.

Callers receive a ``ResponseStream`` from every ``call_stream`` regardless of
vendor. It forwards the pull contract unchanged, exposes the accumulated
``ChatResponse`` once iteration ends, and adds Python conveniences:

- ``for chunk in stream`` iterates chunks and raises the stream error (if
  any) after the last delivered chunk;
- ``with stream:`` closes the body on exit;
- ``cancel(reason)`` cancels the token threaded through the call.
"""
from __future__ import annotations

from typing import Iterator, Optional

from ..cancellation import CancellationToken
from ..errors import ProviderError
from ..interfaces_parts.stream_source import StreamSource
from ..models import ChatResponse, StreamChunk


class ResponseStream:
    """Vendor-independent pull iterator."""

    def __init__(self, source: StreamSource, *, token: Optional[CancellationToken] = None) -> None:
        self._source = source
        self._token = token
        self._finished = False

    def next(self) -> bool:
        """Advance to the next chunk; False at end-of-stream or on error."""
        if self._finished:
            return False
        advanced = self._source.next()
        if not advanced:
            self._finished = True
        return advanced

    def current(self) -> StreamChunk:
        return self._source.current()

    def err(self) -> Optional[ProviderError]:
        return self._source.err()

    def close(self) -> None:
        """Release the underlying response body; safe to call repeatedly."""
        self._finished = True
        self._source.close()

    def response(self) -> ChatResponse:
        """Return the accumulated response.

        Final once ``next()`` has returned False; before that it reflects the
        progress so far.
        """
        return self._source.response()

    def cancel(self, reason: Optional[str] = None) -> None:
        """Cancel the stream's token, or simply close when there is none."""
        if self._token is not None:
            self._token.cancel(reason)
        else:
            self.close()

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether ``next()`` has returned False."""
        return self._finished

    def __iter__(self) -> Iterator[StreamChunk]:
        while self.next():
            yield self.current()
        error = self.err()
        if error is not None:
            raise error

    def __enter__(self) -> "ResponseStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["ResponseStream"]
