"""
rediskit - Memory Store Backend

In-memory substitute for a redis server, used when no connection
configuration is supplied (tests, local development).

It mirrors the redis command semantics the facade relies on:
- values are encoded like redis-py does (str/bytes/int/float only)
- reads return str (decode_responses=True) or bytes
- per-key expiry, lazily enforced on access
- WRONGTYPE errors when a key is used with the wrong data type
- empty hashes/sets/lists do not exist
"""

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from redis.exceptions import DataError, ResponseError

from ..interface import EncodableValue, StoreInterface, StoreValue

logger = logging.getLogger(__name__)

WRONGTYPE_MESSAGE = "WRONGTYPE Operation against a key holding the wrong kind of value"


class MemoryStoreBackend(StoreInterface):
    """
    In-memory store backend.

    Features:
    - Strings, hashes, sets and lists
    - Per-key TTL driven by an injectable clock
    - Commands serialized through an asyncio.Lock
    """

    def __init__(
        self,
        decode_responses: bool = True,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize memory store backend.

        Args:
            decode_responses: Return str instead of bytes, like redis-py
            clock: Time source in seconds (override in tests to control expiry)
        """
        self.decode_responses = decode_responses
        self._clock = clock

        # key -> bytes | dict[bytes, bytes] | set[bytes] | list[bytes]
        self._data: dict[str, Any] = {}
        # key -> absolute expiry timestamp
        self._expiry: dict[str, float] = {}

        self._lock = asyncio.Lock()

    # ------------ Helpers ------------

    @staticmethod
    def _encode(value: Any) -> bytes:
        """Encode a value the way redis-py's Encoder does."""
        if isinstance(value, bytes):
            return value
        if isinstance(value, bool):
            raise DataError("Invalid input of type: 'bool'. Convert to a bytes, string, int or float first.")
        if isinstance(value, int):
            return str(value).encode()
        if isinstance(value, float):
            return repr(value).encode()
        if isinstance(value, str):
            return value.encode("utf-8")
        raise DataError(
            f"Invalid input of type: '{type(value).__name__}'. Convert to a bytes, string, int or float first."
        )

    def _decode(self, value: bytes | None) -> StoreValue | None:
        if value is None or not self.decode_responses:
            return value
        return value.decode("utf-8")

    def _purge_if_expired(self, name: str) -> None:
        expiry = self._expiry.get(name)
        if expiry is not None and self._clock() >= expiry:
            self._data.pop(name, None)
            del self._expiry[name]

    def _lookup(self, name: str, kind: type) -> Any | None:
        """Return the live value at name, checking its data type."""
        self._purge_if_expired(name)
        value = self._data.get(name)
        if value is not None and not isinstance(value, kind):
            raise ResponseError(WRONGTYPE_MESSAGE)
        return value

    def _remove(self, name: str) -> None:
        self._data.pop(name, None)
        self._expiry.pop(name, None)

    # ------------ Strings / keys ------------

    async def get(self, name: str) -> StoreValue | None:
        async with self._lock:
            return self._decode(self._lookup(name, bytes))

    async def set(self, name: str, value: EncodableValue, ex: int | None = None) -> bool:
        payload = self._encode(value)
        if ex is not None and ex <= 0:
            raise ResponseError("invalid expire time in 'set' command")

        async with self._lock:
            # SET replaces any type and discards the previous TTL
            self._remove(name)
            self._data[name] = payload
            if ex is not None:
                self._expiry[name] = self._clock() + ex
            return True

    async def delete(self, *names: str) -> int:
        async with self._lock:
            count = 0
            for name in names:
                self._purge_if_expired(name)
                if name in self._data:
                    self._remove(name)
                    count += 1
            return count

    async def expire(self, name: str, time: int) -> bool:
        async with self._lock:
            self._purge_if_expired(name)
            if name not in self._data:
                return False
            if time <= 0:
                self._remove(name)
            else:
                self._expiry[name] = self._clock() + time
            return True

    # ------------ Hashes ------------

    async def hset(self, name: str, mapping: Mapping[str, EncodableValue]) -> int:
        if not mapping:
            raise DataError("'hset' with no key value pairs")
        fields = {self._encode(k): self._encode(v) for k, v in mapping.items()}

        async with self._lock:
            current = self._lookup(name, dict)
            if current is None:
                current = self._data[name] = {}
            added = sum(1 for field in fields if field not in current)
            current.update(fields)
            return added

    async def hget(self, name: str, key: str) -> StoreValue | None:
        async with self._lock:
            current = self._lookup(name, dict) or {}
            return self._decode(current.get(self._encode(key)))

    async def hgetall(self, name: str) -> dict[Any, Any]:
        async with self._lock:
            current = self._lookup(name, dict) or {}
            return {self._decode(field): self._decode(value) for field, value in current.items()}

    async def hsetnx(self, name: str, key: str, value: EncodableValue) -> bool:
        field = self._encode(key)
        payload = self._encode(value)

        async with self._lock:
            current = self._lookup(name, dict)
            if current is None:
                current = self._data[name] = {}
            if field in current:
                return False
            current[field] = payload
            return True

    # ------------ Sets ------------

    async def sadd(self, name: str, *values: EncodableValue) -> int:
        if not values:
            raise ResponseError("wrong number of arguments for 'sadd' command")
        members = {self._encode(v) for v in values}

        async with self._lock:
            current = self._lookup(name, set)
            if current is None:
                current = self._data[name] = set()
            before = len(current)
            current.update(members)
            return len(current) - before

    async def scard(self, name: str) -> int:
        async with self._lock:
            return len(self._lookup(name, set) or ())

    async def sismember(self, name: str, value: EncodableValue) -> int | bool:
        member = self._encode(value)
        async with self._lock:
            return 1 if member in (self._lookup(name, set) or ()) else 0

    # ------------ Lists ------------

    async def rpush(self, name: str, *values: EncodableValue) -> int:
        if not values:
            raise ResponseError("wrong number of arguments for 'rpush' command")
        items = [self._encode(v) for v in values]

        async with self._lock:
            current = self._lookup(name, list)
            if current is None:
                current = self._data[name] = []
            current.extend(items)
            return len(current)

    async def lrange(self, name: str, start: int, end: int) -> list[Any]:
        async with self._lock:
            current = self._lookup(name, list) or []
            length = len(current)
            if start < 0:
                start = max(length + start, 0)
            if end < 0:
                end = length + end
            end = min(end, length - 1)
            if start > end:
                return []
            return [self._decode(item) for item in current[start : end + 1]]

    async def llen(self, name: str) -> int:
        async with self._lock:
            return len(self._lookup(name, list) or ())

    async def lpop(self, name: str) -> StoreValue | None:
        async with self._lock:
            current = self._lookup(name, list)
            if not current:
                return None
            item = current.pop(0)
            if not current:
                self._remove(name)
            return self._decode(item)

    # ------------ Connection ------------

    async def ping(self) -> bool:
        return True

    async def dbsize(self) -> int:
        async with self._lock:
            for name in list(self._expiry):
                self._purge_if_expired(name)
            return len(self._data)

    async def flushdb(self) -> bool:
        async with self._lock:
            size = len(self._data)
            self._data.clear()
            self._expiry.clear()
            logger.debug(f"Flushed {size} keys from memory store")
            return True

    async def close(self) -> None:
        """Memory backend holds no connection; data stays in-process."""
        logger.debug("Memory store backend closed")
