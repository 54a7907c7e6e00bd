"""
rediskit - Store Backends

Exports available store backend implementations.

Redis backend is lazy-loaded via factory.py to avoid import overhead.
"""

from .memory import MemoryStoreBackend

__all__ = [
    "MemoryStoreBackend",
]
