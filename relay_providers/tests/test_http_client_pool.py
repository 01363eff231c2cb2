"""Pooled httpx clients are shared per (base_url, purpose)."""

from __future__ import annotations

from relay_providers.base.http import close_all_clients, get_httpx_client
from relay_providers.openai import OpenAIProvider


def test_same_key_reuses_client():
    a = get_httpx_client(None, "pool-test")
    assert get_httpx_client(None, "pool-test") is a
    assert get_httpx_client(None, "other-purpose") is not a
    assert get_httpx_client("https://example.test", "pool-test") is not a


def test_closed_client_is_replaced():
    a = get_httpx_client(None, "pool-closed")
    a.close()
    b = get_httpx_client(None, "pool-closed")
    assert b is not a
    assert not b.is_closed


def test_close_all_clients():
    a = get_httpx_client(None, "pool-all")
    close_all_clients()
    assert a.is_closed
    assert get_httpx_client(None, "pool-all") is not a


def test_adapters_share_the_vendor_pool():
    first = OpenAIProvider(api_key="k")
    second = OpenAIProvider(api_key="k")
    assert first._client is second._client
    assert first._client is get_httpx_client(None, "openai")
