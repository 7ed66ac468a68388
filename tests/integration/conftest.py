"""Fixtures for tests that run against PostgreSQL.

The database is ``<DATABASE_URL database>_test`` unless ``TEST_DATABASE_URL``
is set. Tables are created fresh for every test; the tests are skipped
when the server is unreachable.
"""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Register every model on the metadata before create_all
import expohub.modules.events.models  # noqa: F401
import expohub.modules.exhibitors.models  # noqa: F401
import expohub.modules.invoices.models  # noqa: F401
import expohub.modules.leads.models  # noqa: F401
import expohub.modules.organizations.models  # noqa: F401
import expohub.modules.plans.models  # noqa: F401
import expohub.modules.users.models  # noqa: F401
import expohub.modules.visitors.models  # noqa: F401
from expohub.config import settings
from expohub.core.database import Base, get_db
from expohub.core.notifications import get_email_sender, get_sms_sender
from expohub.core.storage import get_qr_storage
from expohub.main import app
from expohub.modules.gstin.service import get_gstin_service


def _test_database_url() -> str:
    override = os.environ.get("TEST_DATABASE_URL")
    if override:
        return override.replace("postgresql://", "postgresql+asyncpg://")
    url = make_url(settings.async_database_url)
    return url.set(database=f"{url.database}_test").render_as_string(hide_password=False)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Engine bound to the test database with a fresh schema."""
    engine = create_async_engine(_test_database_url(), poolclass=NullPool)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, OperationalError, DBAPIError) as exc:
        await engine.dispose()
        pytest.skip(f"PostgreSQL test database unavailable: {exc}")

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for seeding and inspecting rows. Commit before calling the API."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    mailer,
    texter,
    qr_storage,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app, wired to the test database and recording senders."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: mailer
    app.dependency_overrides[get_sms_sender] = lambda: texter
    app.dependency_overrides[get_qr_storage] = lambda: qr_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()
    get_gstin_service.cache_clear()


@pytest.fixture
async def organization(client: AsyncClient) -> dict:
    """An Active organization created through the API."""
    response = await client.post(
        "/api/v1/organizations",
        json={"orgName": "Acme Expos", "email": "owner@acme.io", "mobile": "9848022338"},
    )
    assert response.status_code == 201, response.text
    return response.json()["organization"]


@pytest.fixture
async def event(client: AsyncClient, organization: dict) -> dict:
    """An upcoming event of ``organization``."""
    response = await client.post(
        "/api/v1/events",
        json={
            "organizationId": organization["id"],
            "eventName": "Build Expo 2099",
            "startDate": "2099-03-01",
            "endDate": "2099-03-03",
            "venue": "HITEX",
            "city": "Hyderabad",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["event"]


@pytest.fixture
def drop_column(db: AsyncSession):
    """Simulate a deployment that never ran the migration adding a column."""

    async def _drop(table: str, column: str) -> None:
        await db.execute(text(f'ALTER TABLE {table} DROP COLUMN "{column}"'))
        await db.commit()

    return _drop
