"""
Shared test fixtures and configuration for entire test suite.

Provides: async SQLite databases, a seeded catalog, a gateway bound to it,
settings and an HTTP client running the full application lifespan.
Dependencies: pytest, sqlalchemy, aiosqlite, fastapi
System role: Test infrastructure and fixture management
"""

from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from tests.helpers import (
    INTRO_ACTIVITY_ID,
    LESSON_ID,
    OTHER_LESSON_ID,
    OTHER_UNIT_ID,
    RETIRED_LESSON_ID,
    RETIRED_UNIT_ID,
    SERVICE_KEY,
    UNIT_ID,
)


def seed_catalog(session: Session) -> None:
    """Insert a small catalog: two live units, one retired, three lessons."""
    from planner_mcp.boundary.db.models import ActivityModel, LessonModel, UnitModel

    session.add_all(
        [
            UnitModel(unit_id=UNIT_ID, title="Fractions", subject="Maths", year=7),
            UnitModel(unit_id=OTHER_UNIT_ID, title="Cells", subject="Biology", year=8),
            UnitModel(
                unit_id=RETIRED_UNIT_ID, title="Old Algebra", subject="Maths", year=7, active=False
            ),
        ]
    )
    session.flush()
    session.add_all(
        [
            LessonModel(lesson_id=LESSON_ID, unit_id=UNIT_ID, title="Adding Fractions", order_by=2),
            LessonModel(
                lesson_id=OTHER_LESSON_ID, unit_id=UNIT_ID, title="Equivalent Fractions", order_by=1
            ),
            LessonModel(
                lesson_id=RETIRED_LESSON_ID, unit_id=UNIT_ID, title="Fractions 100%", active=False
            ),
        ]
    )
    session.flush()
    session.add(
        ActivityModel(
            activity_id=INTRO_ACTIVITY_ID,
            lesson_id=LESSON_ID,
            title="Introduction",
            type="text",
            body_data={"text": "A fraction has a numerator and a denominator."},
            order_by=1,
        )
    )


@pytest.fixture
def catalog_db_path(tmp_path: Path) -> Path:
    """
    Create a seeded SQLite catalog file.

    Seeding uses a synchronous engine so the file can be shared with any
    event loop (pytest-asyncio's or the TestClient's).
    """
    from planner_mcp.boundary.db.base import Base

    db_path = tmp_path / "catalog.db"
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        seed_catalog(session)
        session.commit()
    engine.dispose()
    return db_path


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from planner_mcp.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
async def gateway(catalog_db_path: Path):
    """
    CatalogGateway over the seeded catalog file.

    Yields:
        CatalogGateway: Gateway with its own async engine
    """
    from planner_mcp.boundary.db import CatalogGateway, get_async_engine, get_async_session_factory
    from planner_mcp.configs import DatabaseSettings

    engine = get_async_engine(DatabaseSettings(url=f"sqlite+aiosqlite:///{catalog_db_path}"))
    yield CatalogGateway(get_async_session_factory(engine))
    await engine.dispose()


@pytest.fixture
def test_settings(catalog_db_path: Path):
    """Settings pointing at the seeded catalog with a known service key."""
    from planner_mcp.configs import DatabaseSettings, McpSettings, Settings

    return Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{catalog_db_path}"),
        mcp=McpSettings(service_key=SERVICE_KEY),
    )


@pytest.fixture
def client(test_settings):
    """
    TestClient running the application lifespan (startup checks included).

    Yields:
        TestClient: Client bound to a fresh application
    """
    from fastapi.testclient import TestClient
    from planner_mcp.api.main import create_app

    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {SERVICE_KEY}"}


