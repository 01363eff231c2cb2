"""CancellationToken semantics."""

from __future__ import annotations

import threading

import pytest

from relay_providers.base.cancellation import CancellationToken, CancelledError


def test_cancel_sets_state_and_reason():
    token = CancellationToken()
    assert not token.cancelled
    token.cancel("done")
    assert token.cancelled
    assert token.reason == "done"
    token.cancel("again")
    assert token.reason == "done"


def test_raise_if_cancelled():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel()
    with pytest.raises(CancelledError, match="operation cancelled"):
        token.raise_if_cancelled()


def test_callbacks_fire_once():
    token = CancellationToken()
    calls = []
    token.add_callback(lambda: calls.append("a"))
    handle = token.add_callback(lambda: calls.append("b"))
    token.remove_callback(handle)
    token.cancel()
    token.cancel()
    assert calls == ["a"]


def test_callback_added_after_cancel_runs_immediately():
    token = CancellationToken()
    token.cancel()
    calls = []
    assert token.add_callback(lambda: calls.append(1)) == -1
    assert calls == [1]


def test_children_inherit_cancellation():
    parent = CancellationToken()
    child = parent.child()
    grandchild = child.child()
    parent.cancel("shutdown")
    assert child.cancelled and grandchild.cancelled
    assert grandchild.reason == "shutdown"


def test_child_of_cancelled_parent_starts_cancelled():
    parent = CancellationToken()
    parent.cancel()
    assert parent.child().cancelled


def test_cancel_from_another_thread():
    token = CancellationToken()
    fired = threading.Event()
    token.add_callback(fired.set)
    threading.Thread(target=token.cancel).start()
    assert fired.wait(timeout=5)
    assert token.cancelled


def test_cancelled_error_keeps_reason():
    assert CancelledError().reason is None
    assert str(CancelledError()) == "operation cancelled"
    assert CancelledError("user abort").reason == "user abort"


def test_removed_callback_does_not_fire():
    token = CancellationToken()
    calls = []
    handle = token.add_callback(lambda: calls.append("a"))
    token.add_callback(lambda: calls.append("b"))
    token.remove_callback(handle)
    token.cancel()
    token.cancel()
    assert calls == ["b"]
