"""Cancellation primitives (implementation package).

Prefer importing from ``relay_providers.base.cancellation``.
"""

from .cancelled_error import CancelledError
from .cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
