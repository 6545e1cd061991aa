"""Async Session Factory — DB sessions for scripts outside FastAPI (seed import, migrations).

Invariants:
    - Each factory owns its own engine; callers dispose it via factory.kw["bind"]

Design Decisions:
    - Separate from infrastructure/database.py: no pooling or error mapping needed
      for one-shot scripts (ADR: alembic and CLI seeding need a raw session factory)
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def create_session_factory(
    database_url: str,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
