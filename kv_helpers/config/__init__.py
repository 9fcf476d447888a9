"""Configuration for KV-Helpers."""

from .merge import is_truthy, merge_objects
from .settings import Settings, settings

__all__ = ["Settings", "settings", "merge_objects", "is_truthy"]
