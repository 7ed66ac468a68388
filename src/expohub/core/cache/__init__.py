"""Cache module.

Provides:
- A bounded in-process LRU/TTL cache
- Redis client connection management and a Redis cache backend
- Serialization utilities for cache values
"""

from expohub.core.cache.base import ResultCache
from expohub.core.cache.memory import MemoryCache
from expohub.core.cache.redis import RedisCache, close_redis_pool, redis_client
from expohub.core.cache.serializers import deserialize, serialize


__all__ = [
    "MemoryCache",
    "RedisCache",
    "ResultCache",
    "close_redis_pool",
    "deserialize",
    "redis_client",
    "serialize",
]
