"""Shared helpers used by the vendor adapters."""

from .messages import join_system, require_model, split_system

__all__ = ["split_system", "join_system", "require_model"]
