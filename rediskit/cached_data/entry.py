"""
rediskit - Cached Data

A keyed, TTL-aware cache entry over the store facade.

The key function is the only extension point: it turns a (possibly
partial) entity mapping into the storage key. It must give the same key
for a partial mapping and for the full entity carrying the same identity,
e.g. lambda e: f"user:{e['id']}".

Example:
    users = CachedData(lambda e: f"user:{e['id']}", ttl=300)
    await users.save({"id": 7, "name": "A"})
    user = await users.load({"id": 7})
    await users.clean({"id": 7})
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from ..store import RedisClient, get_store

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (partial entity) -> storage key
GetKey = Callable[[Mapping[str, Any]], str]


class CachedData(Generic[T]):
    """
    Cache entry for one entity shape.

    Entities are JSON mappings by default. When a pydantic model is given,
    load() returns model instances and save() accepts them.
    """

    def __init__(
        self,
        get_key: GetKey,
        ttl: int = 0,
        store: RedisClient | None = None,
        model: type[BaseModel] | None = None,
    ) -> None:
        """
        Args:
            get_key: Builds the storage key from a partial or full entity mapping
            ttl: Lifetime of saved entries in seconds (0 = no expiry)
            store: Store facade; defaults to the process-wide store, resolved on first use
            model: Optional pydantic model the entity is validated into
        """
        if ttl < 0:
            raise ValueError("ttl must be >= 0")
        self.get_key = get_key
        self.ttl = ttl
        self.model = model
        self._store = store

    @property
    def store(self) -> RedisClient:
        if self._store is None:
            self._store = get_store()
        return self._store

    def key_for(self, key: Mapping[str, Any] | BaseModel) -> str:
        """Storage key for a partial or full entity."""
        if isinstance(key, BaseModel):
            key = key.model_dump(mode="json")
        return self.get_key(key)

    async def load(self, key: Mapping[str, Any]) -> T | None:
        """
        Load an entity.

        Returns:
            The cached entity, None on a miss or when the stored payload is malformed
        """
        data = await self.store.get_object(self.key_for(key))
        if data is None or self.model is None:
            return data

        try:
            return self.model.model_validate(data)  # type: ignore[return-value]
        except ValidationError as e:
            logger.warning(
                f"Cached payload does not match {self.model.__name__}, treating as a miss",
                extra={"model": self.model.__name__, "error_count": e.error_count()},
            )
            return None

    async def save(self, data: T) -> None:
        """Save a full entity with the configured TTL."""
        if isinstance(data, BaseModel):
            payload: Any = data.model_dump(mode="json")
        else:
            payload = data
        await self.store.set(self.key_for(payload), payload, self.ttl)

    async def clean(self, key: Mapping[str, Any]) -> None:
        """Remove the cached entity, if any."""
        await self.store.delete(self.key_for(key))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ttl={self.ttl}, model={self.model.__name__ if self.model else None})"
