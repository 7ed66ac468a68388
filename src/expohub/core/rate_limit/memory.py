"""In-process sliding window rate limiter."""

import math
import time
from collections import OrderedDict, deque
from collections.abc import Callable

from expohub.core.rate_limit.backend import RateLimitResult


class MemoryRateLimiter:
    """Sliding window limiter holding request timestamps per identifier.

    The number of tracked identifiers is bounded; when full, the bucket
    that was used least recently is dropped. Not thread-safe; intended
    for a single event loop.
    """

    def __init__(
        self,
        max_identifiers: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_identifiers: Upper bound on tracked identifiers
            clock: Monotonic time source, injectable for tests
        """
        self.max_identifiers = max_identifiers
        self._clock = clock
        self._buckets: OrderedDict[str, deque[float]] = OrderedDict()

    async def is_allowed(self, identifier: str, limit: int, window: int) -> RateLimitResult:
        now = self._clock()
        bucket = self._buckets.get(identifier)
        if bucket is None:
            bucket = deque()
            self._buckets[identifier] = bucket
        self._buckets.move_to_end(identifier)

        while bucket and now - bucket[0] >= window:
            bucket.popleft()

        if len(bucket) >= limit:
            retry_after = max(1, math.ceil(window - (now - bucket[0])))
            return RateLimitResult(
                allowed=False,
                limit=limit,
                remaining=0,
                reset_time=int(time.time() + retry_after),
                retry_after=retry_after,
            )

        bucket.append(now)
        while len(self._buckets) > self.max_identifiers:
            self._buckets.popitem(last=False)

        return RateLimitResult(
            allowed=True,
            limit=limit,
            remaining=limit - len(bucket),
            reset_time=int(time.time() + window),
        )

    async def reset(self, identifier: str) -> bool:
        return self._buckets.pop(identifier, None) is not None
