"""
rediskit - Store Interface

Defines the primitive operation surface every store backend must implement.

The method names and signatures follow redis.asyncio.Redis so the redis
backend is a thin pass-through and the in-memory backend can stand in for
it without any caller-visible difference.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

# Raw values as the store returns them (str when decode_responses is on)
StoreValue = str | bytes
# Values accepted by store writes before encoding
EncodableValue = str | bytes | int | float


class StoreInterface(ABC):
    """
    Abstract base class for store backends.

    Every method is a single store command. Backends perform no JSON
    handling; that is the facade's job.
    """

    # ------------ Strings / keys ------------

    @abstractmethod
    async def get(self, name: str) -> StoreValue | None:
        """
        Read a string value.

        Args:
            name: Key name

        Returns:
            Stored value, None if the key is absent or expired
        """
        pass

    @abstractmethod
    async def set(self, name: str, value: EncodableValue, ex: int | None = None) -> bool:
        """
        Write a string value.

        Args:
            name: Key name
            value: Value to store
            ex: Expiry in seconds, applied atomically with the write (None = no expiry)

        Returns:
            True when the write was accepted
        """
        pass

    @abstractmethod
    async def delete(self, *names: str) -> int:
        """Delete keys. Returns the number of keys that existed."""
        pass

    @abstractmethod
    async def expire(self, name: str, time: int) -> bool:
        """
        Set a key's time-to-live.

        Returns:
            True if the timeout was set, False if the key does not exist
        """
        pass

    # ------------ Hashes ------------

    @abstractmethod
    async def hset(self, name: str, mapping: Mapping[str, EncodableValue]) -> int:
        """Write hash fields. Returns the number of fields that were added."""
        pass

    @abstractmethod
    async def hget(self, name: str, key: str) -> StoreValue | None:
        """Read one hash field."""
        pass

    @abstractmethod
    async def hgetall(self, name: str) -> dict[Any, Any]:
        """Read all hash fields (empty dict if the key is absent)."""
        pass

    @abstractmethod
    async def hsetnx(self, name: str, key: str, value: EncodableValue) -> bool:
        """Set a hash field only if it does not exist yet."""
        pass

    # ------------ Sets ------------

    @abstractmethod
    async def sadd(self, name: str, *values: EncodableValue) -> int:
        """Add set members. Returns the number of members that were added."""
        pass

    @abstractmethod
    async def scard(self, name: str) -> int:
        """Return the set cardinality (0 if the key is absent)."""
        pass

    @abstractmethod
    async def sismember(self, name: str, value: EncodableValue) -> int | bool:
        """Membership test. Returns 1/True when the value is a member."""
        pass

    # ------------ Lists ------------

    @abstractmethod
    async def rpush(self, name: str, *values: EncodableValue) -> int:
        """Append to the tail of a list. Returns the new list length."""
        pass

    @abstractmethod
    async def lrange(self, name: str, start: int, end: int) -> list[Any]:
        """
        Read a range of list elements.

        Indices are inclusive; negative indices count from the tail
        (-1 is the last element).
        """
        pass

    @abstractmethod
    async def llen(self, name: str) -> int:
        """Return the list length (0 if the key is absent)."""
        pass

    @abstractmethod
    async def lpop(self, name: str) -> StoreValue | None:
        """Remove and return the head element."""
        pass

    # ------------ Connection ------------

    @abstractmethod
    async def ping(self) -> bool:
        """Check the backend is reachable."""
        pass

    @abstractmethod
    async def dbsize(self) -> int:
        """Number of live keys in the selected database."""
        pass

    @abstractmethod
    async def flushdb(self) -> bool:
        """Remove every key from the selected database."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Close the backend and release resources.

        Should be called during graceful shutdown.
        """
        pass
