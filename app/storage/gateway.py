"""Storage gateway contract — the async key-value service vendors persist to."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class StorageError(Exception):
    """Base exception for storage gateway failures (I/O, driver, transport)."""


@runtime_checkable
class StorageGateway(Protocol):
    """Async key-value persistence service.

    Any object implementing these four coroutines can back the vendor
    repository. Implementations raise :class:`StorageError` on failure.
    """

    async def list(self, prefix: str) -> list[str]:
        """Return every key that starts with *prefix*, in no particular order."""
        ...

    async def get(self, key: str) -> str | None:
        """Return the raw stored value, or None when the key does not exist."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Create or overwrite *key*."""
        ...

    async def delete(self, key: str) -> None:
        """Remove *key* if present; deleting a missing key is a no-op."""
        ...
