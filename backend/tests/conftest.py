"""
Pytest configuration and shared fixtures for backend tests.
"""

import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from datetime import UTC, datetime
from typing import AsyncGenerator, Awaitable, Callable, Optional

from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Import after path is set
from core.domain.roles import OrganizationRoleName
from infrastructure.database.models import (
    Base,
    BoardColumn,
    Organization,
    OrganizationRole,
    Project,
    Task,
)
from infrastructure.database.connection import get_db


# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Actor ids as issued by the external auth provider
OWNER_ID = "user_owner"
ADMIN_ID = "user_admin"
MODERATOR_ID = "user_moderator"
MEMBER_ID = "user_member"
OUTSIDER_ID = "user_outsider"

# Fixed reference time for service-level tests
T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
async def db_engine():
    """Create a test database engine with foreign keys enforced."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite ignores ON DELETE rules unless this is set per connection
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    # Reset rate limiter state between tests to prevent cross-test 429s
    if hasattr(app.state, "limiter"):
        app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Record Fixtures
# ============================================================================

@pytest.fixture
async def organization(db_session: AsyncSession) -> Organization:
    """Organization owned by OWNER_ID, who also holds the owner role."""
    org = Organization(name="Acme", description="Test organization", owner_id=OWNER_ID)
    db_session.add(org)
    await db_session.flush()

    db_session.add(
        OrganizationRole(
            organization_id=org.id,
            user_id=OWNER_ID,
            role=OrganizationRoleName.OWNER.value,
        )
    )
    await db_session.commit()
    return org


@pytest.fixture
def add_role(db_session: AsyncSession) -> Callable[..., Awaitable[OrganizationRole]]:
    """Factory granting a user a role in an organization."""

    async def _add_role(org: Organization, user_id: str, role: OrganizationRoleName):
        membership = OrganizationRole(
            organization_id=org.id,
            user_id=user_id,
            role=role.value,
        )
        db_session.add(membership)
        await db_session.commit()
        return membership

    return _add_role


@pytest.fixture
async def project(db_session: AsyncSession, organization: Organization) -> Project:
    """Organization project owned by OWNER_ID."""
    proj = Project(
        name="Website Relaunch",
        owner_id=OWNER_ID,
        organization_id=organization.id,
    )
    db_session.add(proj)
    await db_session.commit()
    return proj


@pytest.fixture
async def column(db_session: AsyncSession, project: Project) -> BoardColumn:
    col = BoardColumn(project_id=project.id, title="To Do", order=0)
    db_session.add(col)
    await db_session.commit()
    return col


@pytest.fixture
def make_task(db_session: AsyncSession) -> Callable[..., Awaitable[Task]]:
    """Factory creating a live task, optionally inside a project."""

    async def _make_task(
        title: str = "Write copy",
        owner_id: str = OWNER_ID,
        project: Optional[Project] = None,
        assignee_id: Optional[str] = None,
    ) -> Task:
        task = Task(
            title=title,
            owner_id=owner_id,
            assignee_id=assignee_id,
            project_id=project.id if project else None,
            organization_id=project.organization_id if project else None,
        )
        db_session.add(task)
        await db_session.commit()
        return task

    return _make_task
