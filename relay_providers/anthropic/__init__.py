"""Anthropic Messages API adapter (streaming Framing C).

Importing the package registers ``"anthropic"`` in the default provider registry.
"""

from .client import AnthropicProvider
from .stream_helpers import AnthropicStreamNormalizer

__all__ = ["AnthropicProvider", "AnthropicStreamNormalizer"]
