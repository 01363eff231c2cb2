"""Shared building blocks for the raw-HTTP vendor adapters.

Kept out of ``relay_providers.base``'s top-level exports because settings
resolution depends on ``relay_providers.config``.
"""

from .adapter_settings import AdapterSettings, resolve_adapter_settings
from .http_adapter import BaseHTTPAdapter

__all__ = ["AdapterSettings", "resolve_adapter_settings", "BaseHTTPAdapter"]
