"""Resolved construction settings for an HTTP wire adapter.

``resolve_adapter_settings`` merges explicit constructor arguments, an
optional :class:`AdapterParams` and the layered provider configuration into
one frozen value. Credentials are checked here so a missing key fails at
construction time, before any network call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ...config import get_provider_config
from ...config.env import get_env_var_name
from ..dto import AdapterParams
from ..errors import ConfigurationError


@dataclass(frozen=True)
class AdapterSettings:
    """Credentials, endpoint and defaults for one adapter instance.

    Attributes:
        provider: Canonical provider name.
        api_key: Credential sent in the vendor auth header.
        base_url: Vendor base URL without a trailing slash.
        model: Configured default model (requests must still name a model).
        headers: Extra static headers added to every request.
        extra: Remaining provider-specific configuration keys.
    """

    provider: str
    api_key: str
    base_url: str
    model: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)


def resolve_adapter_settings(
    provider: str,
    *,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    model: Optional[str] = None,
    params: Optional[AdapterParams] = None,
) -> AdapterSettings:
    """Merge explicit values over configuration and validate credentials.

    Precedence (later wins): configuration layers, ``params``, keyword
    arguments.

    Raises:
        ConfigurationError: no API key could be resolved, or the base URL
            is empty.
    """
    overrides: Dict[str, Any] = {}
    headers: Dict[str, str] = {}
    if params is not None:
        overrides.update(params.extra)
        overrides.update(params.model_dump(include={"api_key", "base_url", "model"}, exclude_none=True))
        headers.update(params.headers)
    explicit = {"api_key": api_key, "base_url": base_url, "model": model}
    overrides.update({k: v for k, v in explicit.items() if v is not None})

    cfg = get_provider_config(provider, overrides)
    key = cfg.pop("api_key", None)
    if not key:
        env_name = get_env_var_name(provider) or f"{provider.upper()}_API_KEY"
        raise ConfigurationError(
            f"{provider} API key required: set {env_name} or pass api_key",
            provider=provider,
        )
    resolved_base = str(cfg.pop("base_url", "") or "").rstrip("/")
    if not resolved_base:
        raise ConfigurationError(f"{provider} base_url is not configured", provider=provider)
    return AdapterSettings(
        provider=provider,
        api_key=str(key),
        base_url=resolved_base,
        model=cfg.pop("model", None),
        headers=headers,
        extra=cfg,
    )


__all__ = ["AdapterSettings", "resolve_adapter_settings"]
