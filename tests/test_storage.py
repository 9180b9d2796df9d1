import asyncio
from contextlib import asynccontextmanager

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.clock import MonotonicMillisClock
from app.db.base import create_tables
from app.repositories.vendor import VendorRepository
from app.schemas.vendor import VendorInput
from app.storage import MemoryStorageGateway, SqlStorageGateway, StorageGateway, build_gateway
from app.storage.gateway import StorageError


@asynccontextmanager
async def sql_gateway():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_tables(engine)
    try:
        yield SqlStorageGateway(async_sessionmaker(engine, expire_on_commit=False))
    finally:
        await engine.dispose()


async def _exercise_contract(gw):
    await gw.set("vendor:a", "1")
    await gw.set("vendor:b", "2")
    await gw.set("other:c", "3")
    await gw.set("vendor:a", "1b")

    assert sorted(await gw.list("vendor:")) == ["vendor:a", "vendor:b"]
    assert await gw.get("vendor:a") == "1b"
    assert await gw.get("vendor:zzz") is None

    await gw.delete("vendor:a")
    await gw.delete("vendor:a")
    assert await gw.list("vendor:") == ["vendor:b"]


@pytest.mark.anyio
class TestGatewayContract:
    async def test_memory_gateway(self):
        gw = MemoryStorageGateway()
        assert isinstance(gw, StorageGateway)
        await _exercise_contract(gw)

    async def test_sql_gateway(self):
        async with sql_gateway() as gw:
            assert isinstance(gw, StorageGateway)
            await _exercise_contract(gw)

    async def test_sql_prefix_is_literal(self):
        async with sql_gateway() as gw:
            await gw.set("vendor_x", "like-wildcard bait")
            await gw.set("vendor:1", "real")
            assert await gw.list("vendor:") == ["vendor:1"]
            assert await gw.list("vendor_") == ["vendor_x"]

    async def test_sql_concurrent_first_writes_do_not_collide(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
        await create_tables(engine)
        gw = SqlStorageGateway(async_sessionmaker(engine, expire_on_commit=False))
        values = [str(n) for n in range(8)]
        try:
            await asyncio.gather(*(gw.set("vendor:same", value) for value in values))

            assert await gw.list("vendor:") == ["vendor:same"]
            assert await gw.get("vendor:same") in values
        finally:
            await engine.dispose()

    async def test_sql_errors_become_storage_errors(self):
        engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
        gw = SqlStorageGateway(async_sessionmaker(engine))  # tables never created
        try:
            with pytest.raises(StorageError):
                await gw.get("vendor:a")
        finally:
            await engine.dispose()


@pytest.mark.anyio
class TestRepositoryOverSql:
    async def test_round_trip_and_ordering(self):
        async with sql_gateway() as gw:
            repo = VendorRepository(gw, clock=MonotonicMillisClock())
            first = await repo.save(VendorInput(name="First", address="A", phone="1"))
            second = await repo.save(VendorInput(name="Second", address="B", phone="2"))
            await gw.set("vendor:vendor_bad", "not json")

            vendors = await repo.load_all()
            assert [v.id for v in vendors] == [second.id, first.id]

            edited = await repo.save(VendorInput(name="First", address="C", phone="1"), first)
            assert (await repo.get(first.id)) == edited


def test_build_gateway():
    assert isinstance(build_gateway("memory"), MemoryStorageGateway)
    assert isinstance(build_gateway("sql"), SqlStorageGateway)
    with pytest.raises(ValueError):
        build_gateway("redis")
