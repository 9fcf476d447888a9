"""
Redis Access Layer

This module wraps a redis.asyncio client with small awaitable helpers for
primitives, hashes, sets, key scanning and expiry.

Values are written in their stored string form (see protocol.values.to_string)
and read back through from_string, so callers get typed scalars back.

Keys passed to the data helpers are stored under config["data_prefix"].
The set helpers (save_set_value, remove_set_value, is_value_exists_in_set)
and remove() work on raw keys.
"""

import logging
import os
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..config.merge import merge_objects
from ..config.settings import settings
from ..exceptions import EmptyValueError, StoreNotReadyError
from ..protocol.values import UNDEFINED, from_string, to_string
from .retry import build_retry

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Dict[str, Any]], Redis]


def create_redis_client(config: Dict[str, Any]) -> Redis:
    """
    Create a redis.asyncio client from a store configuration.

    A configured url wins over host and port.
    """
    options = {
        "decode_responses": True,
        "retry": build_retry(config),
    }
    if config.get("url"):
        return Redis.from_url(config["url"], **options)
    return Redis(host=config["host"], port=int(config["port"]), **options)


class RedisStore:
    """
    Awaitable helpers over a Redis data client and a pub/sub client.

    Usage:
        store = RedisStore()
        await store.initialize({"data_prefix": "app_"})
        await store.set_value("visits", 10)
        await store.get_value("visits")   # -> 10

    Attributes:
        config: Store configuration (host, port, url, data_prefix, reconnect timeouts)
    """

    def __init__(
            self,
            config: Mapping[str, Any] = None,
            client_factory: ClientFactory = None,
    ):
        """
        Initialize the store without connecting.

        Args:
            config: Base configuration (default from settings)
            client_factory: Callable building a client from the config
        """
        self.config: Dict[str, Any] = dict(config) if config is not None else settings.as_config()
        self._client_factory = client_factory or create_redis_client

        self._client: Optional[Redis] = None
        self._pubsub_client: Optional[Redis] = None
        self._ready = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self, options: Mapping[str, Any] = None) -> None:
        """
        Merge options into the configuration and connect both clients.

        Falsy option values keep the configured default. Clients from an
        earlier initialize() are closed first; if either ping fails both
        new clients are closed and the error is re-raised.
        """
        await self.close()
        self.config = merge_objects(self.config, options if options is not None else {})

        self._client = self._client_factory(self.config)
        self._pubsub_client = self._client_factory(self.config)

        try:
            await self._client.ping()
            logger.info(f"Redis client ready for worker - {os.getpid()}")
            await self._pubsub_client.ping()
            logger.info(f"Redis pub/sub client ready for worker - {os.getpid()}")
        except Exception:
            await self.close()
            raise
        self._ready = True

    async def close(self) -> None:
        """Close both clients."""
        self._ready = False
        for client in (self._client, self._pubsub_client):
            if client is not None:
                await client.aclose()
        self._client = None
        self._pubsub_client = None

    def get_client(self) -> Optional[Redis]:
        """Return the data client."""
        return self._client

    def get_pubsub_client(self) -> Optional[Redis]:
        """Return the client reserved for pub/sub."""
        return self._pubsub_client

    def is_client_ready(self) -> bool:
        return self._ready

    @property
    def client(self) -> Redis:
        """The data client; raises StoreNotReadyError until initialized."""
        if not self._ready or self._client is None:
            raise StoreNotReadyError()
        return self._client

    def _key(self, key: str) -> str:
        return f"{self.config['data_prefix']}{key}"

    async def _get(self, method: str, key: str) -> Any:
        """Run a single-key read command such as get, hgetall or smembers."""
        return await getattr(self.client, method)(self._key(key))

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    async def set_value(self, key: str, value: Any, lifetime: int = None) -> Optional[bool]:
        """
        Store a primitive value.

        With a lifetime (seconds) the key is only written if it does not
        exist yet (SET NX EX), and None is returned when it already did.
        """
        if lifetime:
            return await self.client.set(self._key(key), to_string(value), nx=True, ex=lifetime)
        return await self.client.set(self._key(key), to_string(value))

    async def get_value(self, key: str) -> Any:
        """Retrieve a primitive value, converted back to its type."""
        return from_string(await self._get("get", key))

    async def increment(self, key: str) -> int:
        """Increment a counter, creating it at 1 if missing."""
        return await self.client.incr(self._key(key))

    # ------------------------------------------------------------------
    # Hashes
    # ------------------------------------------------------------------

    async def set_object(
            self,
            key: str,
            value: Mapping[str, Any],
            lifetime: int = None,
    ) -> int:
        """
        Store a one level mapping (no nested objects) as a hash.

        Returns:
            Number of fields added
        """
        if not value:
            raise EmptyValueError("Can't store empty object")

        mapping = {field: to_string(item) for field, item in value.items()}
        added = await self.client.hset(self._key(key), mapping=mapping)
        if lifetime:
            await self.client.expire(self._key(key), lifetime)
        return added

    async def get_object(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve a stored mapping, or None if the hash is missing.

        Fields stored as "undefined" are left out of the result.
        """
        stored = await self._get("hgetall", key)
        if not stored:
            return None

        result = {}
        for field, item in stored.items():
            converted = from_string(item)
            if converted is not UNDEFINED:
                result[field] = converted
        return result

    # ------------------------------------------------------------------
    # Sets
    # ------------------------------------------------------------------

    async def set_list(self, key: str, value: Union[Iterable[Any], Any]) -> int:
        """
        Add one value or any iterable of values to a set.

        Strings and bytes count as a single value.

        Returns:
            Number of members added
        """
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
            members = [to_string(item) for item in value]
        else:
            members = [to_string(value)]

        if not members:
            raise EmptyValueError("Can't store empty array")
        return await self.client.sadd(self._key(key), *members)

    async def get_list(self, key: str) -> List[Any]:
        """Retrieve the members of a set, converted back to their types."""
        members = await self._get("smembers", key)
        if not members:
            return []
        return [from_string(item) for item in members]

    async def save_set_value(self, set_name: str, value: Any) -> int:
        return await self.client.sadd(set_name, to_string(value))

    async def remove_set_value(self, set_name: str, value: Any) -> int:
        return await self.client.srem(set_name, to_string(value))

    async def is_value_exists_in_set(self, set_name: str, value: Any) -> bool:
        """Check if a value is a member of a (raw key) set."""
        return bool(await self.client.sismember(set_name, to_string(value)))

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    async def is_key_exist(self, key: str) -> bool:
        return bool(await self.client.exists(self._key(key)))

    async def expire(self, key: str, seconds: Union[int, str]) -> bool:
        """Set a key's time to live in seconds."""
        return bool(await self.client.expire(self._key(key), int(seconds)))

    async def remove(self, key: str) -> int:
        """Delete a key given without the data prefix applied."""
        return await self.client.delete(key)

    async def delete_key(self, key: str) -> int:
        """Delete a data key."""
        return await self.client.delete(self._key(key))

    async def get_keys_by_pattern(self, pattern: str, clean: bool = False) -> List[str]:
        """
        Find data keys matching a glob pattern.

        Args:
            pattern: Pattern for keys, i.e. "example.com*"
            clean: Strip the data prefix from the returned keys

        Returns:
            Matching keys
        """
        prefix = self.config["data_prefix"]
        keys = await self.client.keys(f"{prefix}{pattern}")
        if clean:
            return [key.removeprefix(prefix) for key in keys]
        return list(keys)

    async def clean_by_key_pattern(self, pattern: str) -> int:
        """
        Delete every data key matching a glob pattern.

        Returns:
            Number of keys deleted
        """
        keys = await self.get_keys_by_pattern(pattern)
        if not keys:
            return 0
        return await self.client.delete(*keys)

    async def delete_keys_by_pattern(self, pattern: str) -> int:
        """
        Delete keys matching <data_prefix>*<pattern> using SCAN.

        Keys are deleted page by page. A page that fails to delete is
        logged and skipped; the scan goes on.

        Returns:
            Number of matched keys
        """
        client = self.client
        match = f"{self.config['data_prefix']}*{pattern}"
        total = 0
        cursor = 0

        while True:
            cursor, keys = await client.scan(cursor, match=match, count=settings.SCAN_COUNT)
            if keys:
                total += len(keys)
                try:
                    await client.delete(*keys)
                except RedisError as e:
                    logger.error(f"Error deleting keys matching {match}: {e}")
            if int(cursor) == 0:
                break

        logger.info(f"Total deleted keys matching {match} - {total}")
        return total

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    async def get_info(self) -> Dict[str, Any]:
        """Return the parsed INFO reply."""
        return await self.client.info()


# Default store instance
store = RedisStore()
