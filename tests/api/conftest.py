"""API test fixtures — FastAPI app over in-memory SQLite and a mocked request authority.

Invariants:
    - get_db overridden to use the test session factory
    - get_resolver overridden with a resolver backed by httpx.MockTransport
    - Lifespan is not run (ASGITransport); collaborators are wired here
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from carton.api.dependencies import get_resolver
from carton.db.base import Base
from carton.infrastructure.api_client import RequestsApiClient
from carton.infrastructure.database import get_db
from carton.main import app
from carton.models.component import ComponentRow  # noqa: F401
from carton.services.payload_resolver import PayloadResolver

from tests.factories import make_row


@pytest.fixture
async def test_session_factory():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def seed_components(test_session_factory):
    async with test_session_factory() as session:
        session.add(make_row())
        session.add(make_row(id="NOREPO", repo="", operations=["{broken"]))
        await session.commit()


@pytest.fixture
def authority():
    """Configurable request authority: set `authority["response"]`; calls are logged."""
    state = {"calls": [], "response": httpx.Response(404)}

    def handler(request):
        state["calls"].append(request)
        return state["response"]

    state["client"] = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return state


@pytest.fixture
async def client(test_session_factory, authority):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    def override_get_resolver():
        return PayloadResolver(
            RequestsApiClient("http://authority.test/v2", client=authority["client"]),
        )

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_resolver] = override_get_resolver

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
