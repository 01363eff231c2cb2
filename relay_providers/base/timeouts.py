"""Unified timeout configuration for wire adapters.

This module centralizes the timeout values used by the pooled HTTP clients so
no adapter hard-codes its own numbers.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again whenever the relevant variables change. Supported
    environment variables (all optional, positive floats):
        RELAY_TIMEOUT_CONNECT_SECONDS
        RELAY_TIMEOUT_READ_SECONDS
        RELAY_TIMEOUT_HTTP_SECONDS

to_httpx_timeout(cfg)
    Converts a ``TimeoutConfig`` into an ``httpx.Timeout``.

Failure Modes
-------------
Expired timeouts surface as ``httpx.TimeoutException`` from the client and are
wrapped by the transport layer into ``TransportError(code=timeout)``. Nothing
here retries.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Establishing the TCP/TLS connection.
        read_timeout_seconds: Idle time allowed between two reads. For a
            stream this bounds the wait for the next SSE line.
        http_timeout_seconds: Writing the request and acquiring a pooled
            connection.
    """

    connect_timeout_seconds: float = 30.0
    read_timeout_seconds: float = 120.0
    http_timeout_seconds: float = 30.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = (
    "RELAY_TIMEOUT_CONNECT_SECONDS",
    "RELAY_TIMEOUT_READ_SECONDS",
    "RELAY_TIMEOUT_HTTP_SECONDS",
)


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        read_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.read_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


def to_httpx_timeout(cfg: TimeoutConfig | None = None) -> httpx.Timeout:
    """Build the ``httpx.Timeout`` used by pooled clients."""
    cfg = cfg or get_timeout_config()
    return httpx.Timeout(
        connect=cfg.connect_timeout_seconds,
        read=cfg.read_timeout_seconds,
        write=cfg.http_timeout_seconds,
        pool=cfg.http_timeout_seconds,
    )


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "to_httpx_timeout",
]
