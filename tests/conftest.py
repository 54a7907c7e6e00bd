"""
rediskit - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import pytest_asyncio

from rediskit.store import RedisClient
from rediskit.store.backends.memory import MemoryStoreBackend

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"


class FakeClock:
    """Manually advanced time source for expiry tests."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_backend(clock: FakeClock) -> MemoryStoreBackend:
    """Fresh in-memory backend driven by the fake clock."""
    return MemoryStoreBackend(clock=clock)


@pytest.fixture
def store(memory_backend: MemoryStoreBackend) -> RedisClient:
    """Store facade over the in-memory backend."""
    return RedisClient(memory_backend)


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest_asyncio.fixture
async def redis_store(test_redis_url: str) -> AsyncGenerator[RedisClient, None]:
    """
    Store facade over a real Redis server.

    Automatically skips tests if Redis is not available.
    Clears the test database before and after each test.
    """
    from rediskit.config import StoreBackend, StoreConfig
    from rediskit.store.backends.redis import RedisStoreBackend

    backend = RedisStoreBackend(StoreConfig(backend=StoreBackend.REDIS, redis_url=test_redis_url, socket_timeout=2))
    try:
        await backend.connect()
    except Exception as e:
        await backend.close()
        pytest.skip(f"Redis not available for testing: {e}")

    await backend.flushdb()

    yield RedisClient(backend)

    try:
        await backend.flushdb()
    finally:
        await backend.close()


@pytest.fixture
def mock_env_memory(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment selecting the memory store backend."""
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.delenv("REDIS_HOST", raising=False)
    monkeypatch.delenv("STORE_BACKEND", raising=False)


@pytest.fixture
def sample_entities() -> list[dict[str, Any]]:
    """Sample entities for cache testing."""
    return [
        {"id": 1, "name": "Alice", "tags": ["admin"], "profile": {"age": 30}},
        {"id": 2, "name": "Bob", "tags": [], "profile": None},
    ]


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Reset process-wide state after each test to prevent leakage."""
    yield
    from rediskit.cached_data import reset_cached_data_manager
    from rediskit.config import loader
    from rediskit.store import reset_store

    reset_store()
    reset_cached_data_manager()
    loader._config_instance = None
