"""
rediskit - Store Module

JSON-aware facade over a redis connection or its in-memory substitute.

- client.py: RedisClient, the store facade
- interface.py: primitive surface every backend implements
- factory.py: process-wide initialization and lookup
- backends/: redis and in-memory backends

Usage:
    from rediskit.store import init_store

    store = init_store()  # no configuration: in-memory substitute
    await store.set("key", {"a": 1}, ttl=3600)
    value = await store.get_object("key")
"""

from .client import RedisClient
from .factory import (
    close_store,
    create_backend,
    get_store,
    init_store,
    is_store_initialized,
    reset_store,
)
from .interface import StoreInterface

__all__ = [
    # Facade
    "RedisClient",
    # Factory functions
    "init_store",
    "get_store",
    "close_store",
    "reset_store",
    "create_backend",
    "is_store_initialized",
    # Interface
    "StoreInterface",
]
