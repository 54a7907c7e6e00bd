"""
rediskit - Cached Data Manager

Process-wide registry of CachedData instances keyed by an application
chosen "cache kind" tag (a string or an Enum member).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, TypeVar

from ..errors import NotFoundError
from .entry import CachedData

logger = logging.getLogger(__name__)

CacheKind = str | Enum
C = TypeVar("C", bound=CachedData[Any])


class CachedDataManager:
    """
    Registry of cache instances.

    The last registration for a kind wins. Lookups of unregistered kinds
    return None; require() raises instead.
    """

    _instance: CachedDataManager | None = None

    def __init__(self) -> None:
        self._caches: dict[CacheKind, CachedData[Any]] = {}

    @classmethod
    def get_instance(cls) -> CachedDataManager:
        """Return the process-wide manager, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, kind: CacheKind, instance: CachedData[Any]) -> None:
        """Associate instance with kind, replacing any previous registration."""
        if kind in self._caches:
            logger.debug(f"Replacing cached data registered as '{kind}'")
        self._caches[kind] = instance

    def get(self, kind: CacheKind) -> CachedData[Any] | None:
        return self._caches.get(kind)

    def require(self, kind: CacheKind, expected_type: type[C] | None = None) -> C:
        """
        Lookup that fails loudly.

        Args:
            kind: Cache kind tag
            expected_type: Optional CachedData subclass the instance must be

        Raises:
            NotFoundError: If nothing is registered under kind
            TypeError: If the instance is not an expected_type
        """
        instance = self._caches.get(kind)
        if instance is None:
            raise NotFoundError("Cached data", str(kind))
        if expected_type is not None and not isinstance(instance, expected_type):
            raise TypeError(
                f"Cached data '{kind}' is {type(instance).__name__}, expected {expected_type.__name__}"
            )
        return instance  # type: ignore[return-value]

    def unregister(self, kind: CacheKind) -> CachedData[Any] | None:
        """Remove and return the instance registered under kind."""
        return self._caches.pop(kind, None)

    def kinds(self) -> list[CacheKind]:
        """List all registered kinds."""
        return list(self._caches.keys())

    def clear(self) -> None:
        self._caches.clear()

    def __contains__(self, kind: object) -> bool:
        return kind in self._caches

    def __len__(self) -> int:
        return len(self._caches)


def get_cached_data_manager() -> CachedDataManager:
    """Get the process-wide CachedDataManager."""
    return CachedDataManager.get_instance()


def reset_cached_data_manager() -> None:
    """
    Forget the process-wide manager and its registrations.

    Warning: Only use this in testing contexts.
    """
    CachedDataManager._instance = None
