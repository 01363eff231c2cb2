"""Mutable state behind a ``CancellationToken``.

The token guards every access with its own lock; this holder only keeps the
flag, the reason and the pending cancel callbacks keyed by removal handle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

Callback = Callable[[], None]


@dataclass
class State:
    cancelled: bool = False
    reason: Optional[str] = None
    callbacks: Dict[int, Callback] = field(default_factory=dict)
    next_handle: int = 0

    def register(self, callback: Callback) -> int:
        handle = self.next_handle
        self.next_handle += 1
        self.callbacks[handle] = callback
        return handle

    def discard(self, handle: int) -> None:
        self.callbacks.pop(handle, None)

    def mark_cancelled(self, reason: Optional[str]) -> List[Callback]:
        """Flip the flag and hand back the callbacks to fire (in order)."""
        self.cancelled = True
        self.reason = reason
        pending = [self.callbacks[h] for h in sorted(self.callbacks)]
        self.callbacks.clear()
        return pending


__all__ = ["State", "Callback"]
