"""Integration test fixtures for database and HTTP client operations.

Each test gets a fresh SQLite database file with the schema created from
the SQLModel metadata. Uses polyfactory for test data generation.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from src.phasetracker.api.dependencies.db import get_db_session
from src.phasetracker.core import db
from src.phasetracker.core.db.engine import create_engine_from_url
from src.phasetracker.core.db.session import create_session_factory
from src.phasetracker.core.security import create_admin_login_token, create_client_token
from src.phasetracker.main import create_app
from src.phasetracker.models import Admin, Client, Phase, Project, ProjectClient
from src.phasetracker.repositories import (
    AdminRepository,
    AdminVerificationCodeRepository,
    ClientRepository,
    ClientVerificationCodeRepository,
    PhaseRepository,
    ProjectClientRepository,
    ProjectRepository,
)
from src.phasetracker.services import (
    AuthService,
    ClientService,
    ClientViewService,
    PhaseService,
    ProjectService,
)
from tests.factories import AdminFactory, ClientFactory, PhaseFactory, ProjectFactory


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create a test database engine with all tables."""
    test_engine = create_engine_from_url(
        f"sqlite+aiosqlite:///{tmp_path / 'phasetracker.db'}",
        poolclass=NullPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit. Tests seeding data must call
    `await session.commit()` before the API reads it.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to an app whose requests use the test database."""
    await db.dispose_engine()

    app = create_app()

    async def _get_test_db_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _get_test_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    await db.dispose_engine()


# Services wired to the test session


@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(
        AdminRepository(db_session),
        AdminVerificationCodeRepository(db_session),
        ClientRepository(db_session),
        ClientVerificationCodeRepository(db_session),
        db_session,
    )


@pytest.fixture
def phase_service(db_session: AsyncSession) -> PhaseService:
    return PhaseService(PhaseRepository(db_session), ProjectRepository(db_session), db_session)


@pytest.fixture
def project_service(db_session: AsyncSession) -> ProjectService:
    return ProjectService(
        ProjectRepository(db_session),
        PhaseRepository(db_session),
        ClientRepository(db_session),
        db_session,
    )


@pytest.fixture
def client_service(db_session: AsyncSession) -> ClientService:
    return ClientService(
        ClientRepository(db_session),
        ProjectClientRepository(db_session),
        ProjectRepository(db_session),
        db_session,
    )


@pytest.fixture
def client_view_service(db_session: AsyncSession) -> ClientViewService:
    return ClientViewService(
        ProjectRepository(db_session),
        PhaseRepository(db_session),
        ProjectClientRepository(db_session),
        db_session,
    )


# Seed data


@pytest.fixture
async def test_admin(db_session: AsyncSession) -> Admin:
    """A verified admin."""
    admin = AdminFactory.build()
    db_session.add(admin)
    await db_session.commit()
    await db_session.refresh(admin)
    return admin


@pytest.fixture
def admin_headers(test_admin: Admin) -> dict[str, str]:
    assert test_admin.id is not None
    return {"Authorization": f"Bearer {create_admin_login_token(test_admin.id)}"}


@pytest.fixture
async def test_project(db_session: AsyncSession, test_admin: Admin) -> Project:
    project = ProjectFactory.build(created_by_admin_id=test_admin.id)
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


@pytest.fixture
async def test_phases(db_session: AsyncSession, test_project: Project) -> list[Phase]:
    """Three pending phases ordered 1, 2, 3."""
    phases = [
        PhaseFactory.build(project_id=test_project.id, name=f"Phase {order}", order=order)
        for order in (1, 2, 3)
    ]
    db_session.add_all(phases)
    await db_session.commit()
    for phase in phases:
        await db_session.refresh(phase)
    return phases


@pytest.fixture
async def test_client(db_session: AsyncSession, test_project: Project) -> Client:
    """A client assigned to test_project."""
    client = ClientFactory.build()
    db_session.add(client)
    await db_session.flush()
    db_session.add(ProjectClient(project_id=test_project.id, client_id=client.id))
    await db_session.commit()
    await db_session.refresh(client)
    return client


@pytest.fixture
def client_headers(test_client: Client) -> dict[str, str]:
    assert test_client.id is not None
    return {"Authorization": f"Bearer {create_client_token(test_client.id)}"}
