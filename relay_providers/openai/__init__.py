"""OpenAI chat completions adapter (streaming Framing A).

Importing the package registers ``"openai"`` in the default provider registry.
"""

from .client import OpenAIProvider
from .stream_helpers import OpenAIStreamNormalizer
from .structured import make_all_properties_required

__all__ = ["OpenAIProvider", "OpenAIStreamNormalizer", "make_all_properties_required"]
