"""Per-operation logging context.

Adapters and normalizers build one ``LogContext`` per request and pass it to
every ``log_event`` call of that request, so all lines of one call agree on
provider, model and operation.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LogContext:
    provider: Optional[str] = None
    model: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def bind(self, **fields: Any) -> "LogContext":
        """Return a copy whose ``extra`` also carries ``fields``."""
        return replace(self, extra={**self.extra, **fields})

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into log fields; ``extra`` wins ties and ``None`` is dropped."""
        data: Dict[str, Any] = {"provider": self.provider, "model": self.model}
        data.update(self.extra)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
