"""Test fixtures for coedit-api."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from coedit_api.config import password_settings
from coedit_api.db import get_db
from coedit_api.main import app
from coedit_api.models import Base
from coedit_api.services import organizations as organization_service
from coedit_api.services.document_sync import InMemoryDocumentSync, get_document_sync
from coedit_api.services.sessions import AuthResult

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Use the minimum bcrypt cost so tests stay fast."""
    monkeypatch.setattr(password_settings, "bcrypt_rounds", 4)


@pytest.fixture
async def async_engine():
    """Create a test database engine with schema initialized.

    For SQLite tests, we use Base.metadata.create_all() since the migrations
    target PostgreSQL.
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(async_engine, expire_on_commit=False)
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def document_sync() -> InMemoryDocumentSync:
    return InMemoryDocumentSync()


@pytest.fixture
async def client(async_engine, document_sync) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with isolated database and in-memory sync."""
    async_session_maker = async_sessionmaker(async_engine, expire_on_commit=False)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with async_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_document_sync] = lambda: document_sync

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Tenant fixtures ---


@pytest.fixture
async def acme_admin(async_session: AsyncSession) -> AuthResult:
    """Admin of the "Acme" organization (signed up by creating it)."""
    result = await organization_service.create_organization_and_admin(
        async_session,
        email="alice@acme.test",
        name="Alice",
        password="alice-password",
        org_name="Acme",
    )
    await async_session.commit()
    return result


@pytest.fixture
async def acme_code(async_session: AsyncSession, acme_admin: AuthResult) -> str:
    current = await organization_service.get_current_user(
        async_session, acme_admin.token
    )
    assert current is not None
    return current.org_code


@pytest.fixture
async def acme_member(
    async_session: AsyncSession, acme_code: str
) -> AuthResult:
    """Plain member of "Acme" (joined with the invite code)."""
    result = await organization_service.join_organization_by_code(
        async_session,
        email="bob@acme.test",
        name="Bob",
        password="bob-password",
        code=acme_code,
    )
    await async_session.commit()
    return result


@pytest.fixture
async def acme_other_member(
    async_session: AsyncSession, acme_code: str
) -> AuthResult:
    """A second plain member of "Acme"."""
    result = await organization_service.join_organization_by_code(
        async_session,
        email="carol@acme.test",
        name="Carol",
        password="carol-password",
        code=acme_code,
    )
    await async_session.commit()
    return result


@pytest.fixture
async def globex_admin(async_session: AsyncSession) -> AuthResult:
    """Admin of a second, unrelated organization."""
    result = await organization_service.create_organization_and_admin(
        async_session,
        email="gina@globex.test",
        name="Gina",
        password="gina-password",
        org_name="Globex",
    )
    await async_session.commit()
    return result
