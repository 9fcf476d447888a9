"""Stored value conversion for KV-Helpers."""

from .values import UNDEFINED, from_string, is_empty, is_numeric, to_string

__all__ = ["UNDEFINED", "from_string", "is_empty", "is_numeric", "to_string"]
