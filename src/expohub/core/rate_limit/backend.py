"""Sliding window rate limiting.

Two interchangeable backends implement :class:`RateLimiter`:

- :class:`SlidingWindowRateLimiter` keeps the window in a Redis sorted set
  (ZSET), so the budget is shared by every worker process.
- :class:`~expohub.core.rate_limit.memory.MemoryRateLimiter` keeps it in
  process memory.

In both, only admitted requests count against the window. A rejected
request does not push the window forward.
"""

import time
import uuid
from dataclasses import dataclass
from typing import Protocol

from expohub.core.cache.redis import redis_client


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_time: int
    retry_after: int | None = None


class RateLimiter(Protocol):
    """Budget of ``limit`` requests per ``window`` seconds per identifier."""

    async def is_allowed(self, identifier: str, limit: int, window: int) -> RateLimitResult: ...


class SlidingWindowRateLimiter:
    """Redis-based sliding window rate limiter.

    Uses sorted sets to track requests within a sliding time window.
    Each request is stored with its timestamp as the score, allowing
    efficient cleanup of old entries and accurate counting.
    """

    def __init__(self, prefix: str = "ratelimit") -> None:
        """Initialize the rate limiter.

        Args:
            prefix: Key prefix for Redis keys
        """
        self.prefix = prefix

    def _build_key(self, identifier: str) -> str:
        return f"{self.prefix}:{identifier}"

    async def is_allowed(
        self,
        identifier: str,
        limit: int,
        window: int,
    ) -> RateLimitResult:
        """Check if a request is allowed under the rate limit.

        Uses a sliding window algorithm:
        1. Remove entries older than (now - window)
        2. Add current request timestamp
        3. Count entries in the window
        4. Allow if count <= limit, otherwise withdraw the entry again

        Args:
            identifier: Client IP or logical bucket name
            limit: Maximum number of requests allowed in the window
            window: Time window in seconds

        Returns:
            RateLimitResult with allowed status and metadata
        """
        key = self._build_key(identifier)
        now = time.time()
        window_start = now - window
        member = f"{now}:{uuid.uuid4().hex[:8]}"

        async with redis_client() as client:
            async with client.pipeline(transaction=True) as pipe:
                pipe.zremrangebyscore(key, 0, window_start)
                pipe.zadd(key, {member: now})
                pipe.zcard(key)
                pipe.expire(key, window)
                results = await pipe.execute()
            count = results[2]

            allowed = count <= limit
            if not allowed:
                await client.zrem(key, member)

        used = count if allowed else limit
        return RateLimitResult(
            allowed=allowed,
            limit=limit,
            remaining=max(0, limit - used),
            reset_time=int(now + window),
            retry_after=window if not allowed else None,
        )

    async def reset(self, identifier: str) -> bool:
        """Reset rate limit for an identifier.

        Args:
            identifier: Client IP or logical bucket name

        Returns:
            True if key was deleted
        """
        async with redis_client() as client:
            result = await client.delete(self._build_key(identifier))
            return result > 0
