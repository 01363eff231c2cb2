"""Mock provider package exposing a deterministic in-process adapter."""

from .client import MockProvider, MockStreamSource

__all__ = ["MockProvider", "MockStreamSource"]
