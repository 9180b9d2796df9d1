"""Storage package — the key-value gateway the vendor repository persists through.

Files:
  gateway.py  — StorageGateway protocol + StorageError
  memory.py   — dict-backed gateway (tests, STORAGE_BACKEND=memory)
  sql.py      — SQLAlchemy gateway over kv_entries (default)
"""

from __future__ import annotations

from functools import lru_cache

from app.core.config import settings
from app.storage.gateway import StorageError, StorageGateway
from app.storage.memory import MemoryStorageGateway
from app.storage.sql import SqlStorageGateway

__all__ = [
    "MemoryStorageGateway",
    "SqlStorageGateway",
    "StorageError",
    "StorageGateway",
    "build_gateway",
    "get_storage",
]


def build_gateway(backend: str) -> StorageGateway:
    if backend == "memory":
        return MemoryStorageGateway()
    if backend == "sql":
        from app.db.base import async_session_factory

        return SqlStorageGateway(async_session_factory)
    raise ValueError(f"Unknown storage backend '{backend}' (expected 'sql' or 'memory')")


@lru_cache(maxsize=1)
def get_storage() -> StorageGateway:
    """FastAPI dependency: the process-wide gateway selected by STORAGE_BACKEND."""
    return build_gateway(settings.storage_backend)
