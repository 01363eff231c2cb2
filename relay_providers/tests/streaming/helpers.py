"""Helpers for building canned HTTP/SSE exchanges.

Bodies are served through ``httpx.MockTransport`` so adapters and normalizers
run their real code paths without a network. ``CountingStream`` records how
often the body was closed and can split the payload into arbitrary byte
chunks or fail part-way through.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import httpx


def openai_sse(*chunks: Dict[str, Any], done: bool = True) -> bytes:
    lines = [f"data: {json.dumps(c)}\n\n" for c in chunks]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def gemini_sse(*records: Dict[str, Any]) -> bytes:
    return "".join(f"data: {json.dumps(r)}\r\n\r\n" for r in records).encode("utf-8")


def anthropic_sse(*events: Tuple[str, Dict[str, Any]]) -> bytes:
    out = []
    for name, payload in events:
        body = dict(payload)
        body.setdefault("type", name)
        out.append(f"event: {name}\ndata: {json.dumps(body)}\n\n")
    return "".join(out).encode("utf-8")


def split_bytes(data: bytes, size: int) -> List[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]


class CountingStream(httpx.SyncByteStream):
    """Byte stream that counts ``close`` calls and may fail mid-body."""

    def __init__(self, chunks: Sequence[bytes], *, fail_after: Optional[int] = None) -> None:
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self.close_calls = 0
        self.chunks_served = 0

    def __iter__(self) -> Iterator[bytes]:
        for i, chunk in enumerate(self._chunks):
            if self._fail_after is not None and i >= self._fail_after:
                raise httpx.ReadError("connection reset by peer")
            self.chunks_served += 1
            yield chunk

    def close(self) -> None:
        self.close_calls += 1


class Recorder:
    """Record outgoing requests and answer from a canned response factory."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


def json_client(body: Any, *, status: int = 200) -> Tuple[httpx.Client, Recorder]:
    """Client whose every request is answered with ``body`` as JSON."""
    def respond(request: httpx.Request) -> httpx.Response:
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    recorder = Recorder(respond)
    return httpx.Client(transport=httpx.MockTransport(recorder)), recorder


def sse_client(
    body: bytes,
    *,
    chunk_size: Optional[int] = None,
    fail_after: Optional[int] = None,
    status: int = 200,
) -> Tuple[httpx.Client, Recorder, CountingStream]:
    """Client answering with an SSE body, optionally split into byte chunks."""
    chunks = split_bytes(body, chunk_size) if chunk_size else [body]
    stream = CountingStream(chunks, fail_after=fail_after)

    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, headers={"content-type": "text/event-stream"}, stream=stream)

    recorder = Recorder(respond)
    return httpx.Client(transport=httpx.MockTransport(recorder)), recorder, stream


def raising_client(exc_factory: Callable[[httpx.Request], Exception]) -> httpx.Client:
    def respond(request: httpx.Request) -> httpx.Response:
        raise exc_factory(request)

    return httpx.Client(transport=httpx.MockTransport(respond))


def drain(stream) -> Tuple[List[Any], Optional[Exception]]:
    """Pull every chunk with the explicit contract; return chunks and err()."""
    chunks = []
    while stream.next():
        chunks.append(stream.current())
    return chunks, stream.err()


def texts(chunks: Iterable[Any]) -> List[str]:
    return [c.text for c in chunks if c.text]


__all__ = [
    "openai_sse",
    "gemini_sse",
    "anthropic_sse",
    "split_bytes",
    "CountingStream",
    "Recorder",
    "json_client",
    "sse_client",
    "raising_client",
    "drain",
    "texts",
]
