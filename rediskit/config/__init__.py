"""
rediskit - Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    Environment,
    LogLevel,
    RedisKitConfig,
    StoreBackend,
    StoreConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "RedisKitConfig",
    # Enums
    "Environment",
    "StoreBackend",
    "LogLevel",
    # Config sections
    "StoreConfig",
]
