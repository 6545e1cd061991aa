"""Service test fixtures — async DB, sample schema document + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for code paths that open sessions directly (readiness check)
    - imported_schema writes the sample document through replace_schema

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - StaticPool: one shared connection, so every session sees the same in-memory DB
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from structuresync.db.base import Base
from structuresync.infrastructure.database import get_db, DatabaseSessionManager
from structuresync.infrastructure.sql_schema_store import replace_schema
import structuresync.infrastructure.database as db_module
import structuresync.models  # noqa: F401
from structuresync.main import app


def sample_document() -> dict:
    """Person / Employee (child) / Company with a shared Address subobject."""
    return {
        "schemaVersion": "1.0",
        "properties": {
            "Has name": {"datatype": "Text"},
            "Has email": {"datatype": "Email"},
            "Has employee ID": {"datatype": "Text"},
            "Has street": {"datatype": "Text"},
            "Has tag": {"datatype": "Page", "allowsMultipleValues": True},
        },
        "subobjects": {
            "Address": {"properties": {"required": ["Has street"], "optional": ["Has tag"]}},
        },
        "categories": {
            "Person": {
                "properties": {"required": ["Has name"], "optional": ["Has email"]},
                "subobjects": {"required": ["Address"]},
            },
            "Employee": {
                "parent": "Category:Person",
                "properties": {"required": ["Has email"], "optional": ["Has employee ID"]},
            },
            "Company": {
                "properties": {"required": ["Has name"]},
                "subobjects": {"optional": ["Address"]},
            },
        },
    }


@pytest.fixture
def schema_document() -> dict:
    return sample_document()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
        connect_args={"check_same_thread": False}, poolclass=StaticPool,
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
async def imported_schema(test_session_factory, schema_document):
    """Store the sample document; returns the row counts."""
    async with test_session_factory() as session:
        return await replace_schema(session, schema_document)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
