"""Server-Sent Events line reader.

Turns the decoded lines of a streaming HTTP body into ``SSEEvent`` records.
All three vendor framings are handled by one reader:

- ``data:`` lines each produce one event (vendors never split a JSON payload
  across several ``data:`` lines).
- An ``event:`` line names the *next* ``data:`` line; the name is cleared
  after that data line or at a blank line.
- Blank keep-alive lines and ``:`` comment lines are skipped; ``id:`` and
  ``retry:`` fields are ignored.

The reader is a plain generator over the caller's line iterator, so it never
reads ahead of the consumer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


@dataclass(frozen=True)
class SSEEvent:
    """One dispatched event: its ``data`` text and optional ``event`` name."""

    data: str
    event: Optional[str] = None


def _split_field(line: str) -> tuple[str, str]:
    name, sep, value = line.partition(":")
    if sep and value.startswith(" "):
        value = value[1:]
    return name, value


def iter_sse_events(lines: Iterable[str]) -> Iterator[SSEEvent]:
    """Yield ``SSEEvent`` records parsed from ``lines``."""
    event_name: Optional[str] = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            event_name = None
            continue
        if line.startswith(":"):
            continue
        name, value = _split_field(line)
        if name == "event":
            event_name = value.strip() or None
        elif name == "data":
            yield SSEEvent(data=value, event=event_name)
            event_name = None


__all__ = ["SSEEvent", "iter_sse_events"]
