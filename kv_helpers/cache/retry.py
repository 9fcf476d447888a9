"""
Reconnect policy for the Redis clients.

The delay before attempt N is N * 100ms, but never shorter than
max_reconnect_attempt_timeout. Attempts stop once their cumulative delay
would exceed max_reconnect_timeout.
"""

from typing import Any, Mapping

from redis.asyncio.retry import Retry
from redis.backoff import AbstractBackoff

from ..config.settings import settings

STEP_MS = 100


class ReconnectBackoff(AbstractBackoff):
    """Linear backoff with a lower bound, in seconds."""

    def __init__(self, attempt_timeout_ms: int = None):
        self.attempt_timeout_ms = (
            attempt_timeout_ms
            if attempt_timeout_ms is not None
            else settings.MAX_RECONNECT_ATTEMPT_TIMEOUT
        )

    def compute(self, failures: int) -> float:
        return max(failures * STEP_MS, self.attempt_timeout_ms) / 1000.0


def reconnect_retries(config: Mapping[str, Any]) -> int:
    """Number of reconnect attempts that fit inside max_reconnect_timeout."""
    backoff = ReconnectBackoff(int(config["max_reconnect_attempt_timeout"]))
    budget = int(config["max_reconnect_timeout"]) / 1000.0

    retries = 0
    elapsed = backoff.compute(1)
    while elapsed <= budget:
        retries += 1
        elapsed += backoff.compute(retries + 1)
    return retries


def build_retry(config: Mapping[str, Any]) -> Retry:
    """Create the Retry object handed to redis.asyncio.Redis."""
    return Retry(
        ReconnectBackoff(int(config["max_reconnect_attempt_timeout"])),
        reconnect_retries(config),
    )
