"""Rate limiting with a sliding window algorithm.

Redis-backed for multi-process deployments, in-memory otherwise.
"""

from expohub.core.rate_limit.backend import (
    RateLimiter,
    RateLimitResult,
    SlidingWindowRateLimiter,
)
from expohub.core.rate_limit.memory import MemoryRateLimiter


__all__ = [
    "MemoryRateLimiter",
    "RateLimitResult",
    "RateLimiter",
    "SlidingWindowRateLimiter",
]
