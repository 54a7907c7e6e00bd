"""
rediskit - Cached Data Module

Typed cache entries (key function + TTL + JSON) and their registry.

Usage:
    from rediskit.cached_data import CachedData, get_cached_data_manager

    users = CachedData(lambda e: f"user:{e['id']}", ttl=300)
    get_cached_data_manager().register("users", users)
"""

from .entry import CachedData, GetKey
from .manager import (
    CacheKind,
    CachedDataManager,
    get_cached_data_manager,
    reset_cached_data_manager,
)

__all__ = [
    "CachedData",
    "GetKey",
    "CacheKind",
    "CachedDataManager",
    "get_cached_data_manager",
    "reset_cached_data_manager",
]
