"""Service test fixtures — async SQLite database seeded with component rows.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Notifier and clock are fakes; nothing leaves the process

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the store only issues
      point reads and partial updates, which behave the same on PostgreSQL
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from carton.db.base import Base
from carton.models.component import ComponentRow  # noqa: F401
from carton.services.component_lifecycle import ComponentLifecycle
from carton.services.component_store import SqlComponentStore

from tests.factories import make_row

FIXED_NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


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
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_component(test_db):
    """Insert the factory component row."""
    row = make_row()
    test_db.add(row)
    await test_db.commit()
    return row


class FakeNotifier:
    """Records events; raises `fail_with` when set."""

    def __init__(self):
        self.events = []
        self.fail_with: Exception | None = None

    async def notify(self, event):
        if self.fail_with is not None:
            raise self.fail_with
        self.events.append(event)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def store(test_db):
    return SqlComponentStore(test_db)


@pytest.fixture
def lifecycle(store, notifier):
    return ComponentLifecycle(store, notifier, clock=lambda: FIXED_NOW)
