"""Integration test fixtures for database and HTTP client operations.

Each test gets its own in-memory SQLite database (aiosqlite + StaticPool)
with all tables created from SQLModel metadata.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import src.docsite.models  # noqa: F401 - register tables on SQLModel.metadata
from src.docsite.api.dependencies import get_db_session
from src.docsite.core.db import get_session
from src.docsite.core.tenant_context import TenantContext
from src.docsite.main import app
from src.docsite.models import MembershipRole, Tenant, User
from src.docsite.services import ProjectQueryService, ProjectService
from tests.helpers import (
    build_project_service,
    build_query_service,
    create_tenant,
    create_user_with_membership,
    make_context,
)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory SQLite async engine with all tables."""
    test_engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session configured like the application's sessions."""
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def tenant(db_session: AsyncSession) -> Tenant:
    return await create_tenant(db_session, name="Acme", slug="acme")


@pytest.fixture
async def other_tenant(db_session: AsyncSession) -> Tenant:
    return await create_tenant(db_session, name="Globex", slug="globex")


@pytest.fixture
async def owner(db_session: AsyncSession, tenant: Tenant) -> User:
    """User with owner membership in ``tenant``."""
    user, _ = await create_user_with_membership(
        db_session, tenant, MembershipRole.OWNER, full_name="Olivia Owner"
    )
    return user


@pytest.fixture
def ctx(owner: User, tenant: Tenant) -> TenantContext:
    """Owner context in ``tenant``."""
    return make_context(owner, tenant, MembershipRole.OWNER)


@pytest.fixture
def project_service(db_session: AsyncSession) -> ProjectService:
    return build_project_service(db_session)


@pytest.fixture
def query_service(db_session: AsyncSession) -> ProjectQueryService:
    return build_query_service(db_session)


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """AsyncClient with the request session bound to the test engine."""

    async def _override_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
