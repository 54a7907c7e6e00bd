"""
rediskit - Store Factory

Creates the store facade from configuration and keeps the process-wide
instance.

Key points:
- init_store(None) selects the in-memory substitute
- init_store(config) with backend=redis connects through redis.asyncio
- init_store is idempotent: later calls return the existing instance
  without reconfiguring it

Examples:
    from rediskit.store import init_store, get_store
    from rediskit.config import get_config

    init_store(get_config().store)
    store = get_store()
    await store.set("greeting", "hello")

Applications that prefer explicit wiring can skip the singleton and build
RedisClient(create_backend(config)) themselves.
"""

from __future__ import annotations

import logging

from ..config import StoreBackend, StoreConfig
from ..errors import ConfigurationError, StoreNotInitializedError
from .backends.memory import MemoryStoreBackend
from .client import RedisClient
from .interface import StoreInterface

logger = logging.getLogger(__name__)

_store_instance: RedisClient | None = None


def _create_redis_backend(config: StoreConfig) -> StoreInterface:
    """Internal helper to construct a redis backend with lazy import."""
    if not (config.redis_url or config.host):
        raise ConfigurationError(
            "REDIS_URL or REDIS_HOST must be set when STORE_BACKEND=redis",
            details={"env": "REDIS_URL", "backend": "redis"},
        )

    try:
        from .backends.redis import RedisStoreBackend
    except ImportError as e:
        logger.error(
            "Redis backend selected but redis client is not installed",
            extra={"package": "redis>=5.0.0", "error": str(e)},
        )
        raise ConfigurationError(
            "Redis backend selected but redis client is unavailable. "
            "Install with: pip install 'redis>=5.0.0' or add to dependencies.",
            details={"package": "redis>=5.0.0", "error": str(e), "backend": "redis"},
        ) from e

    return RedisStoreBackend(config)


def create_backend(config: StoreConfig | None = None) -> StoreInterface:
    """
    Build a store backend.

    Args:
        config: Store configuration; None selects the in-memory substitute

    Returns:
        Configured backend

    Raises:
        ConfigurationError: If the configuration names an unknown or unusable backend
    """
    if config is None or config.backend == StoreBackend.MEMORY:
        logger.debug("Using in-memory store substitute")
        return MemoryStoreBackend(decode_responses=config.decode_responses if config else True)

    if config.backend == StoreBackend.REDIS:
        return _create_redis_backend(config)

    raise ConfigurationError(
        f"Unknown store backend: {config.backend!r}",
        details={"backend": str(config.backend), "supported": ["memory", "redis"]},
    )


def init_store(config: StoreConfig | None = None) -> RedisClient:
    """
    Initialize the process-wide store facade.

    The redis connection is opened lazily by the first command; await
    get_store().connect() to open it eagerly.

    Args:
        config: Store configuration; None selects the in-memory substitute

    Returns:
        The process-wide RedisClient (the existing one on repeated calls)
    """
    global _store_instance

    if _store_instance is not None:
        logger.debug("Store already initialized, ignoring new configuration")
        return _store_instance

    backend = create_backend(config)
    _store_instance = RedisClient(backend)

    logger.info(
        "Store initialized with backend: %s",
        type(backend).__name__,
        extra={"backend": config.backend.value if config else StoreBackend.MEMORY.value},
    )
    return _store_instance


def get_store() -> RedisClient:
    """
    Get the process-wide store facade.

    Raises:
        StoreNotInitializedError: If init_store() has not been called
    """
    if _store_instance is None:
        raise StoreNotInitializedError()
    return _store_instance


def is_store_initialized() -> bool:
    return _store_instance is not None


async def close_store() -> None:
    """
    Close the process-wide store and forget it.

    Should be called during graceful shutdown.
    """
    global _store_instance

    if _store_instance is None:
        logger.debug("No store instance to close")
        return

    try:
        await _store_instance.close()
        logger.info("Store closed")
    finally:
        _store_instance = None


def reset_store() -> None:
    """
    Drop the process-wide store reference without closing it.

    Warning: Only use this in testing contexts.
    """
    global _store_instance

    _store_instance = None
    logger.debug("Reset store factory")
