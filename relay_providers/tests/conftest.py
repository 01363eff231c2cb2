"""Pytest configuration for the relay_providers test suite.

Every test runs against a registry snapshot, a scrubbed credential
environment and fresh configuration caches so ordering never matters.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from relay_providers.base.http import close_all_clients
from relay_providers.base.registry import default_registry
from relay_providers.config import CONFIG_FILE_ENV, reset_config_cache

_SCRUBBED_ENV = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "ANTHROPIC_BASE_URL",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_BASE_URL",
    "GOOGLE_API_KEY",
    CONFIG_FILE_ENV,
)


@pytest.fixture(autouse=True)
def isolated_registry() -> Iterator[None]:
    """Restore the default registry's registrations after each test."""
    registry = default_registry()
    saved = registry.snapshot()
    yield
    registry.restore(saved)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Remove real credentials and point the .env lookup at an empty path."""
    for name in _SCRUBBED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


class _ListHandler(logging.Handler):
    """Capture structured log lines as parsed dictionaries."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"msg": record.getMessage()}
        payload.setdefault("logger", record.name)
        self.events.append(payload)


@pytest.fixture()
def log_capture() -> Iterator[List[Dict[str, Any]]]:
    """Yield the list of events logged on the shared ``relay`` logger."""
    logger = logging.getLogger("relay")
    handler = _ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.events
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


@pytest.fixture(scope="session", autouse=True)
def close_pooled_clients() -> Iterator[None]:
    yield
    close_all_clients()
