"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable, provider-agnostic cancellation constructs via the canonical
``relay_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the single cancellation handle threaded from a call
  site through the HTTP request and into a stream.
- ``CancelledError`` is raised by operations that observe a cancellation
  request; the engine reports it as a ``TransportError`` with code
  ``cancelled``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
