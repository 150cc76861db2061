import os
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from smartshift.core import config
from smartshift.db import models  # noqa: F401  (registers the roster tables)
from smartshift.db import session as db_session
from smartshift.db.base import Base
from smartshift.main import create_application
from smartshift.services.policy import Policy, load_default_policy


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_config() -> Iterator[None]:
    """Settings and the derived policy are cached; drop them around each test."""
    config.get_settings.cache_clear()
    config.get_policy.cache_clear()
    yield
    config.get_settings.cache_clear()
    config.get_policy.cache_clear()


@pytest.fixture()
def policy() -> Policy:
    return load_default_policy()


@pytest.fixture()
def database_url() -> str:
    return os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture()
async def roster_engine(database_url: str) -> AsyncIterator[AsyncEngine]:
    """Per-test engine with an empty roster schema."""
    engine = create_async_engine(database_url, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(roster_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(roster_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture()
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    roster_engine: AsyncEngine,
    monkeypatch: pytest.MonkeyPatch,
) -> AsyncIterator[AsyncClient]:
    monkeypatch.setattr(db_session, "engine", roster_engine)
    monkeypatch.setattr(db_session, "async_session_factory", session_factory)
    app = create_application()

    async def _roster_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[db_session.get_db_session] = _roster_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
