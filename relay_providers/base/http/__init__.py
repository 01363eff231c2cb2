"""HTTP utilities package for wire adapters.

Exposes pooled httpx clients and the shared JSON POST / SSE open helpers.
"""

from .client import get_httpx_client, close_all_clients
from .transport import ErrorDetails, api_error_from_body, decode_json, open_stream, post_json, read_body

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "ErrorDetails",
    "api_error_from_body",
    "decode_json",
    "open_stream",
    "post_json",
    "read_body",
]
