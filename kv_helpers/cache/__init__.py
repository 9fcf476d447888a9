"""Redis access layer for KV-Helpers."""

from .retry import ReconnectBackoff
from .store import RedisStore, store

__all__ = ["RedisStore", "ReconnectBackoff", "store"]
