"""Shared fixtures: in-memory SQLite database and an ASGI test client."""

import os

# Must be set before app.config caches its settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings, get_settings
from app.main import app
from app.models.base import Base, get_db


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite+aiosqlite://",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
async def client(session_factory, settings):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


async def register(client: AsyncClient, username: str = "alice", password: str = "secret1"):
    response = await client.post("/api/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()
