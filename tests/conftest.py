"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
The Redis client is replaced by an AsyncMock, so no server is needed.
"""

import pytest
import pytest_asyncio
from typing import Any, Dict
from unittest.mock import AsyncMock

from kv_helpers.cache.store import RedisStore


TEST_CONFIG: Dict[str, Any] = {
    "host": "localhost",
    "port": 6379,
    "url": None,
    "data_prefix": "lb_",
    "max_reconnect_attempt_timeout": 3000,
    "max_reconnect_timeout": 60 * 60 * 1000,
}


# ============================================================================
# Redis Client Fixtures
# ============================================================================

@pytest.fixture
def store_config() -> Dict[str, Any]:
    """A copy of the configuration used by the test stores."""
    return dict(TEST_CONFIG)


@pytest.fixture
def redis_client() -> AsyncMock:
    """A stand-in for redis.asyncio.Redis; every command is awaitable."""
    return AsyncMock()


@pytest.fixture
def client_factory(redis_client: AsyncMock):
    """
    Factory fixture handed to RedisStore.

    Records every configuration it is called with in ``factory.configs``.
    """
    def factory(config: Dict[str, Any]) -> AsyncMock:
        factory.configs.append(config)
        return redis_client
    factory.configs = []
    return factory


# ============================================================================
# RedisStore Fixtures
# ============================================================================

@pytest.fixture
def new_store(store_config, client_factory) -> RedisStore:
    """Create a RedisStore that has not been initialized."""
    return RedisStore(config=store_config, client_factory=client_factory)


@pytest_asyncio.fixture
async def store(new_store: RedisStore) -> RedisStore:
    """Create an initialized RedisStore backed by the mock client."""
    await new_store.initialize()
    return new_store


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
