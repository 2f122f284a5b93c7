# tests/conftest.py
import pytest
from httpx import ASGITransport, AsyncClient

from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession

from charging_backend.main import app
from charging_backend.auth.security import issue_token
from charging_backend.db.init_db import init_db
from charging_backend.db.session import build_engine, get_db

from fakes import FakeIdentityProvider, InMemoryProfileStore, InMemoryStationStore


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def test_engine(tmp_path):
    # same engine setup as production, on a real file so every session sees the same database
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test_stations.db'}")
    await init_db(bind=engine)

    yield engine

    await engine.dispose()


@pytest.fixture()
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def client(session_factory):
    # one fresh session per request, like the real get_db
    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    def _headers(uid: str) -> dict:
        return {"Authorization": f"Bearer {issue_token(uid)}"}
    return _headers


# ---------------------------
# In-memory collaborators
# ---------------------------
@pytest.fixture()
def profile_store():
    return InMemoryProfileStore()


@pytest.fixture()
def station_store():
    return InMemoryStationStore()


@pytest.fixture()
def identity():
    return FakeIdentityProvider()
