"""Tests for the Redis cache backend and cache serialization."""

from contextlib import contextmanager
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock, patch

from expohub.core.cache import RedisCache, deserialize, serialize
from expohub.modules.gstin.schemas import GstinDetails


@contextmanager
def redis_returning(client: MagicMock):
    """Patch redis_client() to yield ``client``."""
    with patch("expohub.core.cache.redis.redis_client") as mocked:
        mocked.return_value.__aenter__ = AsyncMock(return_value=client)
        mocked.return_value.__aexit__ = AsyncMock(return_value=None)
        yield mocked


class TestRedisCache:
    """Tests for RedisCache."""

    async def test_set_with_ttl_uses_setex(self):
        client = MagicMock()
        client.setex = AsyncMock()
        with redis_returning(client):
            await RedisCache(prefix="gstin:").set("27AAPFU0939F1ZV", {"success": True}, ttl_seconds=60)

        client.setex.assert_awaited_once_with("gstin:27AAPFU0939F1ZV", 60, '{"success": true}')

    async def test_set_without_ttl_uses_set(self):
        client = MagicMock()
        client.set = AsyncMock()
        with redis_returning(client):
            await RedisCache().set("key", [1, 2])

        client.set.assert_awaited_once_with("key", "[1, 2]")

    async def test_get_deserializes(self):
        client = MagicMock()
        client.get = AsyncMock(return_value='{"success": false}')
        with redis_returning(client):
            value = await RedisCache(prefix="gstin:").get("key")

        assert value == {"success": False}
        client.get.assert_awaited_once_with("gstin:key")

    async def test_get_missing(self):
        client = MagicMock()
        client.get = AsyncMock(return_value=None)
        with redis_returning(client):
            assert await RedisCache().get("key") is None

    async def test_delete(self):
        client = MagicMock()
        client.delete = AsyncMock(return_value=1)
        with redis_returning(client):
            assert await RedisCache(prefix="p:").delete("key") is True

        client.delete.assert_awaited_once_with("p:key")


class TestSerializers:
    def test_dates_round_trip(self):
        value = {"at": datetime(2026, 1, 2, 3, 4, 5), "on": date(2026, 1, 2)}
        assert deserialize(serialize(value)) == value

    def test_pydantic_models_come_back_as_dicts(self):
        details = GstinDetails(gstin="27AAPFU0939F1ZV", legal_name="Urban Foods")

        restored = deserialize(serialize(details))

        assert restored["gstin"] == "27AAPFU0939F1ZV"
        assert restored["legal_name"] == "Urban Foods"
