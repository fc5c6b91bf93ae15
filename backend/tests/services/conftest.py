"""Service test fixtures — async DB, ledger store, seeded users, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - store is a real DatabaseSessionManager bound to the test engine
    - get_db_manager dependency overridden so routes use the test store

Design Decisions:
    - SQLite in-memory: fast, no external dependency, supports UPDATE/DELETE ... RETURNING
    - Assertions read through fresh sessions (store.session()), never a long-lived
      session whose identity map could hold stale balances
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from bankroll.db.base import Base
from bankroll.infrastructure.database import DatabaseSessionManager, get_db_manager
from bankroll.main import app
from tests.services.ledger_helpers import add_user


def _manager_for(engine) -> DatabaseSessionManager:
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def store(test_engine):
    return _manager_for(test_engine)


@pytest.fixture
async def file_store(tmp_path):
    """File-backed store: real separate connections for concurrency tests."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield _manager_for(engine)
    await engine.dispose()


@pytest.fixture
async def seed_user(store):
    return await add_user(store)


@pytest.fixture
async def client(store):
    """FastAPI test client with the ledger store overridden."""
    app.dependency_overrides[get_db_manager] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
