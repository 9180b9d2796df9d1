"""Async SQLAlchemy engine, session factory, declarative Base, and schema bootstrap."""


from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
_engine_kwargs: dict = {
    "pool_pre_ping": True,
    "echo": False,
}

# SQLite (local dev) doesn't support connection pooling parameters
if settings.database_url.startswith("sqlite"):
    _engine_kwargs["connect_args"] = {"check_same_thread": False}

engine = create_async_engine(settings.database_url, **_engine_kwargs)

# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)

# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""

# ---------------------------------------------------------------------------
# Schema bootstrap
# ---------------------------------------------------------------------------
async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create every table registered on Base (no-op for existing tables)."""
    import app.domain  # noqa: F401  (register ORM models on Base.metadata)

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
