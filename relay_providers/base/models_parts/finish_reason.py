"""
Canonical finish-reason vocabulary.

Every vendor reports why generation stopped using its own strings. Adapters
translate those strings into one of the three members below; unrecognized
vendor values collapse to ``STOP``.
"""
from __future__ import annotations

from enum import Enum


class FinishReason(str, Enum):
    """Why the model stopped producing output."""

    STOP = "stop"
    TOOL_CALLS = "tool_calls"
    LENGTH = "length"


__all__ = ["FinishReason"]
