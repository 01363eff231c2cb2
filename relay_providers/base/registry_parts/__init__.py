"""Provider registry parts package.

Re-exports the registry class and its lock so callers can import from
``relay_providers.base.registry_parts`` directly.
"""

from .provider_registry import ProviderConstructor, ProviderRegistry
from .read_write_lock import ReadWriteLock

__all__ = ["ProviderRegistry", "ProviderConstructor", "ReadWriteLock"]
