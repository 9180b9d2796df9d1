import pytest
from fastapi.testclient import TestClient

from app.main import app as _app
from app.repositories.vendor import VendorRepository
from app.schemas.vendor import VendorInput
from app.services.vendor import VendorService
from app.storage import MemoryStorageGateway, get_storage
from app.storage.gateway import StorageError


@pytest.fixture
def anyio_backend():
    return "asyncio"


class StepClock:
    """Deterministic epoch-ms clock: each reading advances by *step*."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.current = start
        self.step = step

    def __call__(self) -> int:
        value = self.current
        self.current += self.step
        return value


class FailingGateway(MemoryStorageGateway):
    """Memory gateway whose selected operations raise."""

    def __init__(self, *failing: str, error: Exception | None = None, initial=None):
        super().__init__(initial)
        self.failing = set(failing)
        self.error = error or StorageError("storage unavailable")

    def _maybe_fail(self, op: str) -> None:
        if op in self.failing:
            raise self.error

    async def list(self, prefix):
        self._maybe_fail("list")
        return await super().list(prefix)

    async def get(self, key):
        self._maybe_fail("get")
        return await super().get(key)

    async def set(self, key, value):
        self._maybe_fail("set")
        await super().set(key, value)

    async def delete(self, key):
        self._maybe_fail("delete")
        await super().delete(key)


@pytest.fixture
def failing_gateway():
    """Factory: ``failing_gateway("set", error=OSError(...), initial={...})``."""
    return FailingGateway


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def gateway():
    return MemoryStorageGateway()


@pytest.fixture
def repo(gateway, clock):
    return VendorRepository(gateway, clock=clock)


@pytest.fixture
def service(gateway, repo):
    return VendorService(gateway, repository=repo)


@pytest.fixture
def acme():
    return VendorInput(name="Acme Co", address="1 Main St", phone="555-0100")


@pytest.fixture
def client(gateway):
    _app.dependency_overrides[get_storage] = lambda: gateway
    yield TestClient(_app)
    _app.dependency_overrides.clear()
