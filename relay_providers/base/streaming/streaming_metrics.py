"""Streaming metrics data structures.

Collected per stream and emitted with the ``stream.end`` / ``stream.error``
log events.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Timing and volume figures for a single stream.

    ``time_to_first_token_ms`` is measured from stream open to the first
    surfaced chunk; ``total_duration_ms`` from open to end-of-stream.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=time.perf_counter)

    def mark_emitted(self) -> None:
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = (time.perf_counter() - self.started_at) * 1000.0
        self.emitted += 1

    def finish(self) -> None:
        if self.total_duration_ms is None:
            self.total_duration_ms = (time.perf_counter() - self.started_at) * 1000.0

    def to_log_fields(self) -> Dict[str, Any]:
        return {
            "emitted_count": self.emitted,
            "time_to_first_token_ms": self.time_to_first_token_ms,
            "total_duration_ms": self.total_duration_ms,
        }


__all__ = ["StreamMetrics"]
