"""SQL-backed storage gateway over the kv_entries table."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.kv_entry import KeyValueEntry
from app.storage.gateway import StorageError

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


def _upsert(dialect_name: str, key: str, value: str):
    """Single-statement create-or-overwrite, so concurrent first writes cannot collide."""
    insert = _UPSERT_DIALECTS.get(dialect_name)
    if insert is None:
        return None
    stmt = insert(KeyValueEntry).values(key=key, value=value)
    return stmt.on_conflict_do_update(
        index_elements=[KeyValueEntry.key],
        set_={"value": stmt.excluded.value, "updated_at": datetime.now(timezone.utc)},
    )


class SqlStorageGateway:
    """Each call runs in its own short-lived session and commits on success."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list(self, prefix: str) -> list[str]:
        q = select(KeyValueEntry.key).where(
            KeyValueEntry.key.startswith(prefix, autoescape=True)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(q)
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.error("kv list failed for prefix %r: %s", prefix, exc)
            raise StorageError(f"list failed: {exc}") from exc

    async def get(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as exc:
            logger.error("kv get failed for %r: %s", key, exc)
            raise StorageError(f"get failed: {exc}") from exc

    async def set(self, key: str, value: str) -> None:
        try:
            async with self._session_factory() as session:
                stmt = _upsert(session.bind.dialect.name, key, value)
                if stmt is not None:
                    await session.execute(stmt)
                else:
                    await session.merge(KeyValueEntry(key=key, value=value))
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("kv set failed for %r: %s", key, exc)
            raise StorageError(f"set failed: {exc}") from exc

    async def delete(self, key: str) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("kv delete failed for %r: %s", key, exc)
            raise StorageError(f"delete failed: {exc}") from exc
