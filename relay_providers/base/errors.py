"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``relay_providers.base.errors_parts`` to maintain a stable import path.

Taxonomy
--------
- ``ConfigurationError`` / ``UnknownProviderError``: raised before any I/O.
- ``TransportError``: connect/timeout/cancel failures, tagged with a phase.
- ``APIError``: non-success vendor responses and in-stream error events.
- ``DecodeError``: malformed JSON bodies or SSE events.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, code_for_status, code_for_transport
from .errors_parts.configuration_error import ConfigurationError, UnknownProviderError
from .errors_parts.transport_error import TransportError
from .errors_parts.api_error import APIError
from .errors_parts.decode_error import SHAPE_ERRORS, DecodeError

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "code_for_status",
    "code_for_transport",
    "ConfigurationError",
    "UnknownProviderError",
    "TransportError",
    "APIError",
    "DecodeError",
    "SHAPE_ERRORS",
]
