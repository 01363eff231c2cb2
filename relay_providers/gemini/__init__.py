"""Gemini generateContent adapter (streaming Framing B).

Importing the package registers ``"gemini"`` in the default provider registry.
"""

from .client import GeminiProvider
from .stream_helpers import GeminiStreamNormalizer

__all__ = ["GeminiProvider", "GeminiStreamNormalizer"]
