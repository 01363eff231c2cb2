"""Typed parameter object for provider adapter construction.

Purpose
-------
Carry the common construction parameters (credentials, endpoint, default
model, static headers) as one validated value so registry constructors and
plugins do not need long keyword lists.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation.

Failure modes
-------------
- Pure data container; pydantic raises ``ValidationError`` on wrong types.
- Explicit keyword arguments given to a provider constructor take precedence
  over the values carried here.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common provider adapter construction parameters.

    Attributes
    ----------
    api_key:
        Credential passed to the vendor's auth header. Falls back to the
        environment when omitted.
    base_url:
        Override for the vendor base URL (proxies, gateways, test servers).
    model:
        Configured default model, reported by ``default_model()``. Requests
        must still name their model.
    headers:
        Extra static HTTP headers added to every request.
    extra:
        Provider-specific settings (for example ``api_version``).
    """

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["AdapterParams"]
