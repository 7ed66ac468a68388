"""Tests for the bounded in-process cache."""

import pytest

from expohub.core.cache import MemoryCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestMemoryCache:
    """Tests for MemoryCache."""

    async def test_get_missing_returns_none(self):
        cache = MemoryCache()
        assert await cache.get("missing") is None

    async def test_set_and_get(self):
        cache = MemoryCache()
        await cache.set("key", {"value": 1})
        assert await cache.get("key") == {"value": 1}

    async def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = MemoryCache(clock=clock)
        await cache.set("key", "value", ttl_seconds=10)

        clock.now = 9.9
        assert await cache.get("key") == "value"

        clock.now = 10
        assert await cache.get("key") is None
        assert len(cache) == 0

    async def test_default_ttl_applies(self):
        clock = FakeClock()
        cache = MemoryCache(default_ttl=5, clock=clock)
        await cache.set("key", "value")

        clock.now = 5
        assert await cache.get("key") is None

    async def test_evicts_least_recently_used(self):
        cache = MemoryCache(max_entries=2)
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.get("a")
        await cache.set("c", 3)

        assert await cache.get("a") == 1
        assert await cache.get("b") is None
        assert await cache.get("c") == 3
        assert len(cache) == 2

    async def test_delete(self):
        cache = MemoryCache()
        await cache.set("key", "value")

        assert await cache.delete("key") is True
        assert await cache.delete("key") is False

    async def test_clear(self):
        cache = MemoryCache()
        await cache.set("a", 1)
        await cache.clear()
        assert len(cache) == 0

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            MemoryCache(max_entries=0)
