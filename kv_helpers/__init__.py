"""
KV-Helpers: Redis Key-Value Helpers

Awaitable helpers over a redis.asyncio client for primitives, hashes,
sets, key scanning and expiry, with typed value conversion.
"""

__version__ = "1.0.0"
