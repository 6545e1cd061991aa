"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All schema tables (categories, properties, subobjects and their links) inherit from Base
    - Base is the single source of truth for table metadata (alembic autogenerate target)
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all StructureSync ORM models."""
    pass
