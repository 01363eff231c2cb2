"""Token usage counters reported by vendors."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass
class Usage:
    """Prompt, completion and total token counts (zero when not reported)."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt": self.prompt_tokens,
            "completion": self.completion_tokens,
            "total": self.total_tokens,
        }


__all__ = ["Usage"]
