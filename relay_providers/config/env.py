"""relay_providers.config.env
==========================

Environment variable mapping for provider credentials.

Purpose
-------
- Single source of truth mapping provider names to the environment variables
  holding their API keys (canonical name plus accepted aliases).
- Small lookup helpers used by ``get_provider_config``.

Design Notes
------------
- ``ENV_MAP`` holds the canonical variable. Providers that historically accept
  more than one name list them in ``ENV_ALIASES`` with the canonical name
  first, which fixes precedence.
- Values that look like placeholders (``changeme``, ``your-key-here``...) are
  skipped so a template ``.env`` never masks a real credential.

Failure Modes
-------------
- Helpers never raise; they return ``None`` when nothing usable is set and
  leave the decision to the caller (the provider constructor raises
  ``ConfigurationError``).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "your-key", "your_api_key", "<")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True when ``val`` looks like a template value rather than a key.

    The check is case-insensitive and ignores surrounding whitespace.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return any(marker in v for marker in _PLACEHOLDER_MARKERS)


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical credential variable for ``provider`` (or None)."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable variable names for ``provider``, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for ``provider`` from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        candidate; ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
