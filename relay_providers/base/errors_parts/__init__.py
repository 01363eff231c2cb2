"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `relay_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception, code_for_status, code_for_transport
from .configuration_error import ConfigurationError, UnknownProviderError
from .transport_error import TransportError
from .api_error import APIError
from .decode_error import SHAPE_ERRORS, DecodeError

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
