"""
rediskit - Memory Store Backend Tests

Tests the redis command semantics reproduced by the in-memory backend:
encoding, expiry, data types and list ranges.
"""

import asyncio

import pytest
from redis.exceptions import DataError, ResponseError

from rediskit.store.backends.memory import MemoryStoreBackend


class TestMemoryStoreStrings:
    """String and key commands."""

    async def test_set_and_get(self, memory_backend: MemoryStoreBackend) -> None:
        assert await memory_backend.set("key1", "value1") is True
        assert await memory_backend.get("key1") == "value1"

    async def test_get_nonexistent_key(self, memory_backend: MemoryStoreBackend) -> None:
        assert await memory_backend.get("nonexistent") is None

    async def test_numbers_are_stored_as_text(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.set("int", 42)
        await memory_backend.set("float", 1.5)

        assert await memory_backend.get("int") == "42"
        assert await memory_backend.get("float") == "1.5"

    async def test_bytes_mode(self, clock) -> None:
        backend = MemoryStoreBackend(decode_responses=False, clock=clock)
        await backend.set("key", "value")
        assert await backend.get("key") == b"value"

    @pytest.mark.parametrize("value", [True, None, {"a": 1}, [1, 2]])
    async def test_unencodable_values_rejected(self, memory_backend: MemoryStoreBackend, value: object) -> None:
        with pytest.raises(DataError):
            await memory_backend.set("key", value)  # type: ignore[arg-type]

    async def test_delete_counts_existing_keys(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.set("a", "1")
        await memory_backend.set("b", "2")

        assert await memory_backend.delete("a", "b", "missing") == 2
        assert await memory_backend.get("a") is None

    async def test_set_with_expiry(self, memory_backend: MemoryStoreBackend, clock) -> None:
        await memory_backend.set("key", "value", ex=10)

        clock.advance(9.9)
        assert await memory_backend.get("key") == "value"

        clock.advance(0.1)
        assert await memory_backend.get("key") is None

    async def test_set_rejects_non_positive_expiry(self, memory_backend: MemoryStoreBackend) -> None:
        with pytest.raises(ResponseError):
            await memory_backend.set("key", "value", ex=0)

    async def test_set_discards_previous_ttl(self, memory_backend: MemoryStoreBackend, clock) -> None:
        await memory_backend.set("key", "v1", ex=5)
        await memory_backend.set("key", "v2")

        clock.advance(60)
        assert await memory_backend.get("key") == "v2"

    async def test_expire_missing_key(self, memory_backend: MemoryStoreBackend) -> None:
        assert await memory_backend.expire("missing", 10) is False

    async def test_expire_non_positive_deletes(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.set("key", "value")
        assert await memory_backend.expire("key", 0) is True
        assert await memory_backend.get("key") is None

    async def test_expiry_applies_to_every_type(self, memory_backend: MemoryStoreBackend, clock) -> None:
        await memory_backend.rpush("list", "a")
        await memory_backend.expire("list", 1)

        clock.advance(1)
        assert await memory_backend.llen("list") == 0
        assert await memory_backend.dbsize() == 0


class TestMemoryStoreHashes:
    """Hash commands."""

    async def test_hset_hget_hgetall(self, memory_backend: MemoryStoreBackend) -> None:
        added = await memory_backend.hset("h", {"a": 1, "b": "two"})

        assert added == 2
        assert await memory_backend.hget("h", "a") == "1"
        assert await memory_backend.hgetall("h") == {"a": "1", "b": "two"}

    async def test_hset_counts_only_new_fields(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.hset("h", {"a": 1})
        assert await memory_backend.hset("h", {"a": 2, "b": 3}) == 1
        assert await memory_backend.hget("h", "a") == "2"

    async def test_hgetall_missing_key(self, memory_backend: MemoryStoreBackend) -> None:
        assert await memory_backend.hgetall("missing") == {}
        assert await memory_backend.hget("missing", "a") is None

    async def test_hsetnx(self, memory_backend: MemoryStoreBackend) -> None:
        assert await memory_backend.hsetnx("h", "a", "1") is True
        assert await memory_backend.hsetnx("h", "a", "2") is False
        assert await memory_backend.hget("h", "a") == "1"

    async def test_hset_empty_mapping(self, memory_backend: MemoryStoreBackend) -> None:
        with pytest.raises(DataError):
            await memory_backend.hset("h", {})


class TestMemoryStoreSets:
    """Set commands."""

    async def test_sadd_scard_sismember(self, memory_backend: MemoryStoreBackend) -> None:
        assert await memory_backend.sadd("s", "x", "y", "x") == 2
        assert await memory_backend.scard("s") == 2
        assert await memory_backend.sismember("s", "x") == 1
        assert await memory_backend.sismember("s", "z") == 0

    async def test_numeric_members_match_text(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.sadd("s", 1)
        assert await memory_backend.sismember("s", "1") == 1


class TestMemoryStoreLists:
    """List commands."""

    @pytest.fixture
    async def numbers(self, memory_backend: MemoryStoreBackend) -> MemoryStoreBackend:
        await memory_backend.rpush("l", "0", "1", "2", "3", "4")
        return memory_backend

    async def test_rpush_returns_length(self, memory_backend: MemoryStoreBackend) -> None:
        assert await memory_backend.rpush("l", "a") == 1
        assert await memory_backend.rpush("l", "b", "c") == 3

    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (0, -1, ["0", "1", "2", "3", "4"]),
            (1, 2, ["1", "2"]),
            (-2, -1, ["3", "4"]),
            (-100, 1, ["0", "1"]),
            (3, 100, ["3", "4"]),
            (4, 2, []),
            (10, 20, []),
        ],
    )
    async def test_lrange_index_semantics(
        self, numbers: MemoryStoreBackend, start: int, end: int, expected: list[str]
    ) -> None:
        assert await numbers.lrange("l", start, end) == expected

    async def test_lpop_and_llen(self, numbers: MemoryStoreBackend) -> None:
        assert await numbers.lpop("l") == "0"
        assert await numbers.llen("l") == 4

    async def test_lpop_last_element_removes_key(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.rpush("l", "only")
        assert await memory_backend.lpop("l") == "only"
        assert await memory_backend.lpop("l") is None
        assert await memory_backend.dbsize() == 0


class TestMemoryStoreTypes:
    """Cross-type behaviour."""

    async def test_wrong_type(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.set("key", "value")

        with pytest.raises(ResponseError, match="WRONGTYPE"):
            await memory_backend.rpush("key", "a")
        with pytest.raises(ResponseError, match="WRONGTYPE"):
            await memory_backend.hget("key", "a")

    async def test_set_overwrites_other_types(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.sadd("key", "a")
        await memory_backend.set("key", "value")
        assert await memory_backend.get("key") == "value"

    async def test_flushdb(self, memory_backend: MemoryStoreBackend) -> None:
        await memory_backend.set("a", "1")
        await memory_backend.hset("b", {"f": "v"})

        assert await memory_backend.dbsize() == 2
        assert await memory_backend.flushdb() is True
        assert await memory_backend.dbsize() == 0

    async def test_ping_and_close(self, memory_backend: MemoryStoreBackend) -> None:
        assert await memory_backend.ping() is True
        await memory_backend.close()

    async def test_concurrent_pushes(self, memory_backend: MemoryStoreBackend) -> None:
        await asyncio.gather(*(memory_backend.rpush("l", str(i)) for i in range(50)))
        assert await memory_backend.llen("l") == 50
