import sys
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from webgis.storage import MemoryRecordStore

# Lowest work factor bcrypt accepts; keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture()
def memory_store() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture()
def app(data_dir: Path):
    from webgis.main import create_app
    return create_app(data_dir=data_dir, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest_asyncio.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac


@pytest_asyncio.fixture()
async def member(client) -> dict:
    """A registered member, as returned by the API."""
    resp = await client.post(
        "/api/auth/register",
        json={"fullName": "Mai Tran", "email": "mai@example.com", "password": "s3cret"},
    )
    assert resp.status_code == 200
    return resp.json()["user"]
