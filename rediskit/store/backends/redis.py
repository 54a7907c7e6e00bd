"""
rediskit - Redis Store Backend

Thin asynchronous adapter over redis.asyncio.Redis:
- Every primitive is one pass-through command (no pipelining, no retries)
- Connection lifecycle events (connecting, ready, error, reconnecting,
  disconnected) are reported to the log
- Command errors propagate unchanged to the caller

Requires: redis>=5.0 with asyncio support

Example:
    backend = RedisStoreBackend(StoreConfig(backend="redis", redis_url="redis://localhost:6379/0"))
    await backend.connect()
    await backend.set("greeting", "hello", ex=60)
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from ...config import StoreConfig
from ...errors import StoreConnectionError
from ..interface import EncodableValue, StoreInterface, StoreValue

logger = logging.getLogger(__name__)

try:
    from redis.asyncio import Redis
    from redis.exceptions import ConnectionError as RedisConnectionError
    from redis.exceptions import TimeoutError as RedisTimeoutError
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Redis async client is required but not installed. "
        "Install with: pip install 'redis>=5.0.0' or add 'redis' to your dependencies."
    ) from e

R = TypeVar("R")

_CONNECTION_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)


class RedisStoreBackend(StoreInterface):
    """
    Redis store backend.

    Notes:
    - The connection is lazy; the first command (or connect()) opens it.
    - Values are returned as str when decode_responses is enabled (default).
    - Connection state is tracked only to report lifecycle transitions.
    """

    def __init__(
        self,
        config: StoreConfig | None = None,
        client: Redis | None = None,
    ) -> None:
        """
        Initialize Redis store backend.

        Args:
            config: Connection configuration (redis_url or host/port/db)
            client: Pre-built redis client; takes precedence over config
        """
        if client is None:
            if config is None or not (config.redis_url or config.host):
                raise ValueError("redis_url or host is required")
            client = self._build_client(config)

        self._client = client
        self._connected = False
        self._broken = False

    @staticmethod
    def _build_client(config: StoreConfig) -> Redis:
        """Create the redis client (lazy connection; connects on first command)."""
        logger.debug("Redis server parameters", extra={"store_config": config.describe()})
        kwargs = config.connection_kwargs()
        if config.redis_url:
            return Redis.from_url(url=config.redis_url, **kwargs)  # type: ignore[call-overload]
        return Redis(host=config.host, port=config.port, db=config.db, **kwargs)  # type: ignore[arg-type]

    @property
    def client(self) -> Redis:
        """The wrapped redis.asyncio.Redis instance."""
        return self._client

    @property
    def connected(self) -> bool:
        return self._connected

    # ------------ Lifecycle ------------

    async def connect(self) -> None:
        """
        Open the connection eagerly and verify it with PING.

        Raises:
            StoreConnectionError: If the server cannot be reached
        """
        logger.info("Connecting to the redis server...")
        try:
            await self._client.ping()
        except _CONNECTION_ERRORS as e:
            logger.error(f"Redis client error: {e}", extra={"error": str(e)}, exc_info=True)
            raise StoreConnectionError("redis", details={"error": str(e)}) from e
        self._mark_ready()

    def _mark_ready(self) -> None:
        if self._broken:
            logger.info("Reconnected to the redis server.")
        elif not self._connected:
            logger.info("Connected to the redis server.")
        self._connected = True
        self._broken = False

    def _mark_broken(self, error: Exception) -> None:
        logger.error(f"Redis client error: {error}", extra={"error": str(error)})
        if self._connected:
            logger.warning("Connection is broken from the redis server")
        self._connected = False
        self._broken = True

    async def _execute(self, command: Callable[..., Awaitable[R]], *args: Any, **kwargs: Any) -> R:
        """Run one redis command, reporting connection transitions."""
        if self._broken:
            logger.info("Trying to reconnect the redis server...")
        elif not self._connected:
            logger.info("Connecting to the redis server...")
        try:
            result = await command(*args, **kwargs)
        except _CONNECTION_ERRORS as e:
            self._mark_broken(e)
            raise
        if not self._connected:
            self._mark_ready()
        return result

    # ------------ Strings / keys ------------

    async def get(self, name: str) -> StoreValue | None:
        return await self._execute(self._client.get, name)

    async def set(self, name: str, value: EncodableValue, ex: int | None = None) -> bool:
        # redis-py returns True or None
        return bool(await self._execute(self._client.set, name, value, ex=ex))

    async def delete(self, *names: str) -> int:
        return int(await self._execute(self._client.delete, *names))

    async def expire(self, name: str, time: int) -> bool:
        return bool(await self._execute(self._client.expire, name, time))

    # ------------ Hashes ------------

    async def hset(self, name: str, mapping: Mapping[str, EncodableValue]) -> int:
        return int(await self._execute(self._client.hset, name, mapping=dict(mapping)))

    async def hget(self, name: str, key: str) -> StoreValue | None:
        return await self._execute(self._client.hget, name, key)

    async def hgetall(self, name: str) -> dict[Any, Any]:
        return await self._execute(self._client.hgetall, name)

    async def hsetnx(self, name: str, key: str, value: EncodableValue) -> bool:
        return bool(await self._execute(self._client.hsetnx, name, key, value))

    # ------------ Sets ------------

    async def sadd(self, name: str, *values: EncodableValue) -> int:
        return int(await self._execute(self._client.sadd, name, *values))

    async def scard(self, name: str) -> int:
        return int(await self._execute(self._client.scard, name))

    async def sismember(self, name: str, value: EncodableValue) -> int | bool:
        return await self._execute(self._client.sismember, name, value)

    # ------------ Lists ------------

    async def rpush(self, name: str, *values: EncodableValue) -> int:
        return int(await self._execute(self._client.rpush, name, *values))

    async def lrange(self, name: str, start: int, end: int) -> list[Any]:
        return await self._execute(self._client.lrange, name, start, end)

    async def llen(self, name: str) -> int:
        return int(await self._execute(self._client.llen, name))

    async def lpop(self, name: str) -> StoreValue | None:
        return await self._execute(self._client.lpop, name)

    # ------------ Connection ------------

    async def ping(self) -> bool:
        return bool(await self._execute(self._client.ping))

    async def dbsize(self) -> int:
        return int(await self._execute(self._client.dbsize))

    async def flushdb(self) -> bool:
        return bool(await self._execute(self._client.flushdb))

    async def close(self) -> None:
        """Close the redis client and release its pool."""
        try:
            await self._client.aclose()
            logger.info("Connection to the redis server closed")
        except Exception as e:
            logger.error(f"Error closing Redis client: {e}", extra={"error": str(e)}, exc_info=True)
        finally:
            self._connected = False
            try:
                await self._client.connection_pool.disconnect()
            except Exception as e:
                logger.warning(f"Error disconnecting Redis connection pool: {e}", extra={"error": str(e)})
