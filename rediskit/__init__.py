"""
rediskit - JSON-aware redis facade with typed cache entries

Usage:
    from rediskit import CachedData, init_store

    store = init_store()  # in-memory substitute; pass a StoreConfig for redis
    users = CachedData(lambda e: f"user:{e['id']}", ttl=300, store=store)
    await users.save({"id": 7, "name": "A"})
"""

from .cached_data import CachedData, CachedDataManager, get_cached_data_manager
from .config import StoreBackend, StoreConfig, get_config, load_config
from .errors import (
    ConfigurationError,
    NotFoundError,
    RedisKitError,
    StoreConnectionError,
    StoreError,
    StoreNotInitializedError,
)
from .store import RedisClient, close_store, get_store, init_store

__version__ = "0.1.0"

__all__ = [
    # Store
    "RedisClient",
    "init_store",
    "get_store",
    "close_store",
    # Cached data
    "CachedData",
    "CachedDataManager",
    "get_cached_data_manager",
    # Configuration
    "StoreConfig",
    "StoreBackend",
    "load_config",
    "get_config",
    # Errors
    "RedisKitError",
    "ConfigurationError",
    "StoreError",
    "StoreConnectionError",
    "StoreNotInitializedError",
    "NotFoundError",
]
