"""Errors raised by the high-level call API.

These sit beside the ``ProviderError`` taxonomy rather than inside it: they
describe what happened to a response or a tool after the provider answered,
not a failure talking to the provider.
"""

from __future__ import annotations

from typing import Optional


class ParseError(ValueError):
    """Response text could not be validated into the requested output type.

    Attributes:
        content: The raw response text.
        target: Name of the output type.
        cause: Underlying validation exception.
    """

    def __init__(self, content: str, target: str, cause: Optional[BaseException] = None) -> None:
        self.content = content
        self.target = target
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"failed to parse response into {target}{detail}")


class NotParsedError(RuntimeError):
    """``Response.parsed`` was read on a response created without an output type."""

    def __init__(self) -> None:
        super().__init__("response was not parsed: use call_parse to get structured output")


class ToolNotFoundError(LookupError):
    """The model called a tool that is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"tool not found: {name}")


__all__ = ["ParseError", "NotParsedError", "ToolNotFoundError"]
