"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class threaded from a call site through
the HTTP request and into a streaming normalizer. Besides polling via
``cancelled`` / ``raise_if_cancelled``, interested parties may register a
callback that fires once on cancellation; streams use it to close their
response body so a ``next()`` blocked on a network read wakes up.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Optional

from .state import Callback, State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe: ``cancel`` may be called from any thread while another
    thread is inside a stream's ``next()``. Child tokens inherit cancellation
    when the parent is cancelled.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation, fire callbacks once and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            callbacks = self._state.mark_cancelled(reason)
            children = list(self._children)
        for callback in callbacks:
            callback()
        for child in children:
            child.cancel(reason)

    def add_callback(self, callback: Callback) -> int:
        """Register ``callback`` to run on cancellation; return a removal handle.

        If the token is already cancelled the callback runs immediately.
        """
        with self._lock:
            if not self._state.cancelled:
                return self._state.register(callback)
        callback()
        return -1

    def remove_callback(self, handle: int) -> None:
        """Unregister a callback previously added with :meth:`add_callback`."""
        with self._lock:
            self._state.discard(handle)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason)

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
