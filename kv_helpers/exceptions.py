"""Errors raised by the Redis access layer."""


class KVHelpersError(Exception):
    """Base class for kv_helpers errors."""


class StoreNotReadyError(KVHelpersError):
    """A command was issued before initialize() completed or after close()."""

    def __init__(self, message: str = "Redis is not ready"):
        super().__init__(message)


class EmptyValueError(KVHelpersError, ValueError):
    """An empty collection was passed to a write that needs at least one item."""
