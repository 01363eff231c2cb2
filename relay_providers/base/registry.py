"""Process-wide provider registry and plugin discovery.

Purpose
-------
Hold the single default :class:`ProviderRegistry` that vendor packages
populate at import time (``register("openai", OpenAIProvider)``) and expose
module-level helpers mirroring its methods.

Plugins
-------
Third-party distributions add providers by declaring an entry point in the
``relay_providers.plugins`` group. ``load_plugins()`` loads each entry point;
when the loaded object is callable it is invoked with the default registry so
it can call ``registry.register(...)``. Loading a plain module is enough when
the module registers itself on import.

Failure modes
-------------
- ``get`` raises ``UnknownProviderError`` (a ``ConfigurationError``) whose
  message lists every registered name.
- ``load_plugins`` propagates import errors and errors raised by a plugin's
  register callable; nothing is skipped silently.
"""

from __future__ import annotations

from importlib.metadata import entry_points
from typing import List, Optional

from .interfaces import LLMProvider
from .logging import get_logger, log_event
from .registry_parts import ProviderConstructor, ProviderRegistry

PLUGIN_GROUP = "relay_providers.plugins"

_logger = get_logger("relay.registry")
_default_registry = ProviderRegistry(logger=_logger)


def default_registry() -> ProviderRegistry:
    """Return the process-wide registry."""
    return _default_registry


def register(name: str, constructor: ProviderConstructor) -> None:
    """Register ``constructor`` under ``name`` (last write wins)."""
    _default_registry.register(name, constructor)


def unregister(name: str) -> bool:
    return _default_registry.unregister(name)


def get(name: str) -> LLMProvider:
    """Construct the provider registered under ``name``."""
    return _default_registry.get(name)


def available() -> List[str]:
    return _default_registry.available()


def is_registered(name: str) -> bool:
    return _default_registry.is_registered(name)


def clear() -> None:
    """Remove every registration from the default registry."""
    _default_registry.clear()


def load_plugins(
    group: str = PLUGIN_GROUP,
    registry: Optional[ProviderRegistry] = None,
) -> List[str]:
    """Load provider plugins declared under the ``group`` entry-point group.

    Returns the names of the entry points that were loaded, in discovery order.
    """
    target = registry or _default_registry
    loaded: List[str] = []
    for ep in entry_points().select(group=group):
        obj = ep.load()
        if callable(obj):
            obj(target)
        loaded.append(ep.name)
        log_event(_logger, "registry.plugin_loaded", plugin=ep.name, value=ep.value)
    return loaded


__all__ = [
    "PLUGIN_GROUP",
    "ProviderRegistry",
    "ProviderConstructor",
    "default_registry",
    "register",
    "unregister",
    "get",
    "available",
    "is_registered",
    "clear",
    "load_plugins",
]
