"""
Pytest configuration and fixtures for landing builder tests

Every test gets its own in-memory SQLite database. HTTP tests talk to the
real application through httpx with ``get_db`` pointed at that database.
"""

from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from landing_builder.auth import Principal, create_principal_token
from landing_builder.constants.roles import RoleName
from landing_builder.database import Base, get_db
from landing_builder.main import app
from landing_builder.models import Page, Tenant  # noqa: F401
from landing_builder.schemas.page import PageCreate, PageStatus
from landing_builder.services import page_service, tenant_service

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """A fresh in-memory database with all tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the application, backed by the test database."""

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


# ── Tenants ────────────────────────────────────────────────────────────────────


@pytest.fixture
async def acme(test_db: AsyncSession) -> Tenant:
    return await tenant_service.create_tenant("acme", "Acme Inc", "owner@acme.test", test_db)


@pytest.fixture
async def globex(test_db: AsyncSession) -> Tenant:
    return await tenant_service.create_tenant(
        "globex", "Globex Corp", "owner@globex.test", test_db, custom_domain="www.globex.test"
    )


# ── Pages ──────────────────────────────────────────────────────────────────────


@pytest.fixture
def make_page(test_db: AsyncSession):
    """Factory creating a page for a tenant through the lifecycle service."""

    async def _make_page(
        tenant: Tenant,
        slug: str,
        status: PageStatus = PageStatus.PUBLISHED,
        title: str | None = None,
        **fields,
    ) -> Page:
        data = PageCreate(slug=slug, title=title or f"Page {slug or 'root'}", status=status, **fields)
        return await page_service.create_page(tenant.id, data, test_db)

    return _make_page


# ── Auth ───────────────────────────────────────────────────────────────────────


def auth_headers_for(tenant_id: str, role: RoleName, user_id: str = "user-1") -> dict:
    """Bearer headers for a principal of ``tenant_id`` holding ``role``."""
    token = create_principal_token(
        Principal(user_id=user_id, tenant_id=tenant_id, role=role), expires_delta=timedelta(minutes=30)
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_auth_headers():
    return auth_headers_for


@pytest.fixture
def editor_headers(acme: Tenant) -> dict:
    return auth_headers_for(acme.id, RoleName.EDITOR)


@pytest.fixture
def owner_headers(acme: Tenant) -> dict:
    return auth_headers_for(acme.id, RoleName.OWNER)


@pytest.fixture
def viewer_headers(acme: Tenant) -> dict:
    return auth_headers_for(acme.id, RoleName.VIEWER)
