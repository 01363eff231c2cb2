"""relay_providers.config.defaults
==============================

Central place for small, stable default values used by the vendor adapters.
Every value can be overridden through environment variables, the optional
config file, or constructor arguments.

This module avoids importing from other relay packages so it can be imported
from anywhere without creating cycles. Only plain constants live here.
"""

from __future__ import annotations

# ---- Vendor A (OpenAI-compatible chat completions) ----
OPENAI_DEFAULT_MODEL = "gpt-5"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

# ---- Vendor B (Gemini generateContent) ----
GEMINI_DEFAULT_MODEL = "gemini-2.5-pro"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"

# ---- Vendor C (Anthropic messages) ----
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-5"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_API_VERSION = "2023-06-01"
# The messages API requires max_tokens on every request.
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096
ANTHROPIC_STRUCTURED_OUTPUTS_BETA = "structured-outputs-2025-11-13"


__all__ = [
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "ANTHROPIC_STRUCTURED_OUTPUTS_BETA",
]
