"""
Configuration error types.

Raised synchronously, before any network activity, when a call cannot be
issued: missing provider name, missing model, missing credentials, or a
provider name nobody registered.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class ConfigurationError(ProviderError):
    """A contract violation detected before I/O."""

    def __init__(self, message: str, *, provider: str = "relay", model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.CONFIGURATION, message=message, provider=provider, model=model)


class UnknownProviderError(ConfigurationError):
    """Raised by the registry when a name has no registered constructor.

    The message enumerates the names that *are* registered to make typos and
    missing plugin imports easy to spot.
    """

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available: List[str] = sorted(available)
        listing = ", ".join(self.available) if self.available else "none"
        super().__init__(f"unknown provider: {name!r} (available: {listing})", provider=name or "relay")


__all__ = ["ConfigurationError", "UnknownProviderError"]
