"""Typed DTOs used at the provider construction boundary."""

from .adapter_params import AdapterParams

__all__ = ["AdapterParams"]
