"""Provider registry: name → constructor map guarded by a readers/writer lock.

Purpose
-------
Resolve a provider name (``"openai"``, ``"gemini"``, ...) to a live adapter
instance. Vendor packages register their constructor at import time; tests
and plugins may re-register a name at any moment (last write wins).

Concurrency
-----------
Lookups take the shared side of a :class:`ReadWriteLock`; register,
unregister, clear and restore take the exclusive side. Constructors are
invoked *after* the lock is released so a constructor may itself touch the
registry.

Failure modes
-------------
``get`` raises :class:`UnknownProviderError` listing every registered name.
Exceptions raised by a constructor (for example ``ConfigurationError`` for a
missing API key) propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

from ..errors import UnknownProviderError
from ..interfaces import LLMProvider
from ..logging import get_logger, log_event
from .read_write_lock import ReadWriteLock

ProviderConstructor = Callable[[], LLMProvider]


class ProviderRegistry:
    """Thread-safe map from provider name to constructor."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._constructors: Dict[str, ProviderConstructor] = {}
        self._lock = ReadWriteLock()
        self._logger = logger or get_logger("relay.registry")

    def register(self, name: str, constructor: ProviderConstructor) -> None:
        """Register ``constructor`` under ``name``, replacing any previous one."""
        if not name:
            raise ValueError("provider name must be a non-empty string")
        if not callable(constructor):
            raise TypeError(f"constructor for {name!r} is not callable")
        with self._lock.write_locked():
            replaced = name in self._constructors
            self._constructors[name] = constructor
        log_event(self._logger, "registry.register", provider=name, replaced=replaced)

    def unregister(self, name: str) -> bool:
        """Remove ``name``; return True when something was removed."""
        with self._lock.write_locked():
            return self._constructors.pop(name, None) is not None

    def get(self, name: str) -> LLMProvider:
        """Construct and return the provider registered under ``name``."""
        with self._lock.read_locked():
            constructor = self._constructors.get(name)
            if constructor is None:
                available = list(self._constructors)
        if constructor is None:
            raise UnknownProviderError(name, available)
        return constructor()

    def available(self) -> List[str]:
        """Return the registered names, sorted."""
        with self._lock.read_locked():
            return sorted(self._constructors)

    def is_registered(self, name: str) -> bool:
        with self._lock.read_locked():
            return name in self._constructors

    def clear(self) -> None:
        """Drop every registration (test isolation)."""
        with self._lock.write_locked():
            self._constructors.clear()

    def snapshot(self) -> Dict[str, ProviderConstructor]:
        """Return a copy of the current registrations."""
        with self._lock.read_locked():
            return dict(self._constructors)

    def restore(self, registrations: Mapping[str, ProviderConstructor]) -> None:
        """Replace all registrations with ``registrations``."""
        with self._lock.write_locked():
            self._constructors = dict(registrations)


__all__ = ["ProviderRegistry", "ProviderConstructor"]
