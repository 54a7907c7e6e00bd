"""
rediskit - Store Facade

JSON-aware convenience operations over a store backend.

Each method issues the backend primitive(s) directly: no local caching,
no batching and no retries. Errors raised by the backend (connection
failures, WRONGTYPE, unencodable arguments...) propagate unchanged.

Known inherited behaviours:
- hset/sadd/rpush with a ttl write first and set the expiry in a second
  command; a failure in between leaves the key without expiry.
- get_object() drops values that are not valid JSON (returns None) while
  lrange_object() keeps such elements as raw text.

Example:
    store = RedisClient(MemoryStoreBackend())
    await store.set("user:7", {"id": 7, "name": "A"}, ttl=60)
    user = await store.get_object("user:7")
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .interface import EncodableValue, StoreInterface, StoreValue

logger = logging.getLogger(__name__)


def is_structured(value: Any) -> bool:
    """True for values that are written as JSON text (dicts, lists, bools, None...)."""
    if isinstance(value, bool):
        return True
    return not isinstance(value, (str, bytes, int, float))


def to_json(value: Any) -> str:
    """Serialize value to compact JSON text."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _encode_if_structured(value: Any) -> EncodableValue:
    return to_json(value) if is_structured(value) else value


class RedisClient:
    """
    Store facade.

    Owns a single backend (RedisStoreBackend or MemoryStoreBackend) and
    exposes typed operations over strings, hashes, sets and lists.
    """

    def __init__(self, backend: StoreInterface) -> None:
        """
        Args:
            backend: Store backend every operation is delegated to
        """
        self._backend = backend

    @property
    def client(self) -> StoreInterface:
        """The underlying backend, for primitives the facade does not wrap."""
        return self._backend

    async def connect(self) -> None:
        """Open the backend connection eagerly when the backend supports it."""
        connect = getattr(self._backend, "connect", None)
        if connect is not None:
            await connect()

    async def close(self) -> None:
        """Release the backend connection."""
        await self._backend.close()

    # ------------ Strings / keys ------------

    async def set(self, key: str, value: Any, ttl: int | None = 0) -> None:
        """
        Write a value.

        Args:
            key: Key name
            value: Scalar written as-is, anything else written as JSON text
            ttl: Lifetime in seconds; 0/None keeps the key forever
        """
        payload = _encode_if_structured(value)
        if not ttl:
            await self._backend.set(key, payload)
        else:
            await self._backend.set(key, payload, ex=ttl)

    async def get(self, key: str) -> StoreValue | None:
        """Read the raw stored value, None if the key is absent."""
        return await self._backend.get(key)

    async def get_object(self, key: str) -> Any | None:
        """
        Read a value and parse it as JSON.

        Returns None both when the key is absent and when the stored text is
        not valid JSON; use get() to tell the two apart.
        """
        text = await self.get(key)
        if text is None:
            return None
        try:
            return json.loads(text)
        except (ValueError, UnicodeDecodeError):
            logger.debug(f"{text!r} is not a json string.", extra={"key": key})
            return None

    async def delete(self, key: str) -> None:
        """Delete a key; no error if it does not exist."""
        await self._backend.delete(key)

    async def expiry(self, key: str, ttl: int) -> None:
        """Set or overwrite the expiry of an existing key."""
        await self._backend.expire(key, ttl)

    # ------------ Hashes ------------

    async def hset(self, key: str, mapping: Mapping[str, EncodableValue], ttl: int | None = 0) -> None:
        """
        Write hash fields in one command.

        Args:
            key: Key name
            mapping: Field -> value
            ttl: When positive, expiry applied to the whole key afterwards
        """
        await self._backend.hset(key, mapping)
        if ttl is not None and ttl > 0:
            await self.expiry(key, ttl)

    async def hget(self, key: str, field: str) -> StoreValue | None:
        return await self._backend.hget(key, field)

    async def hgetall(self, key: str) -> dict[Any, Any]:
        return await self._backend.hgetall(key)

    async def hsetnx(self, key: str, field: str, value: EncodableValue) -> None:
        """Set a hash field only if it is absent."""
        await self._backend.hsetnx(key, field, value)

    # ------------ Sets ------------

    async def sadd(self, key: str, members: Iterable[EncodableValue], ttl: int) -> None:
        """
        Add members in one command.

        Args:
            key: Key name
            members: Members to add
            ttl: When positive, expiry applied to the whole key afterwards
        """
        await self._backend.sadd(key, *members)
        if ttl > 0:
            await self.expiry(key, ttl)

    async def scard(self, key: str) -> int:
        return await self._backend.scard(key)

    async def is_set_member(self, key: str, value: EncodableValue) -> bool:
        return await self._backend.sismember(key, value) == 1

    # ------------ Lists ------------

    async def rpush(self, key: str, value: Any, ttl: int | None = 0) -> None:
        """Append one element to the tail; structured values are written as JSON text."""
        await self._backend.rpush(key, _encode_if_structured(value))
        if ttl is not None and ttl > 0:
            await self.expiry(key, ttl)

    async def lrange(self, key: str, start: int, end: int) -> list[Any]:
        """Raw elements from start to end inclusive (-1 is the last element)."""
        return await self._backend.lrange(key, start, end)

    async def lrange_object(self, key: str, start: int, end: int) -> list[Any]:
        """
        Like lrange(), parsing each element as JSON.

        Elements that are not valid JSON are returned as raw text.
        """
        items = await self.lrange(key, start, end)
        result = []
        for item in items:
            try:
                result.append(json.loads(item))
            except (ValueError, UnicodeDecodeError):
                logger.warning(f"{item!r} is not a json string", extra={"key": key})
                result.append(item)
        return result

    async def llen(self, key: str) -> int:
        return await self._backend.llen(key)

    async def lpop(self, key: str) -> StoreValue | None:
        """Remove and return the head element."""
        return await self._backend.lpop(key)
