from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """
    Key/value cache consumed by cached repositories.

    Values are JSON-compatible snapshots. Implementations raise
    CacheBackendUnavailable when the backend cannot be reached.
    """

    async def get(self, key: str) -> Any | None:
        """Return the stored value, or None when absent or expired."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value, optionally expiring after ``ttl`` seconds."""
        ...

    async def delete(self, *keys: str) -> int:
        """Delete all given keys in one operation, returns how many existed."""
        ...

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every key starting with ``prefix``, returns how many existed."""
        ...

    async def ping(self) -> bool:
        ...
