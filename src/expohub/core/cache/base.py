"""Cache interface shared by the in-process and Redis backends."""

from typing import Any, Protocol


class ResultCache(Protocol):
    """Key/value cache with per-entry expiry."""

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None if absent or expired."""
        ...

    async def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Store a value, optionally expiring after ``ttl_seconds``."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove a key; True if it was present."""
        ...
