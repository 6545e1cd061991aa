"""Category ORM — persists one category schema and its declarations.

Invariants:
    - name is unique and stored without the "Category:" prefix
    - parent_name is a plain name, not a foreign key: a dangling parent must
      surface as UnknownCategoryError at resolution time, not as a DB failure
    - Declaration links are owned by the category (cascade delete)

Design Decisions:
    - position columns on links keep declaration order (ordering is part of the schema)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from structuresync.db.base import Base


class CategoryRecord(Base):
    """Category aggregate root — owns its property and subobject declarations."""
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    parent_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    property_links: Mapped[list["CategoryPropertyRecord"]] = relationship(
        "CategoryPropertyRecord", back_populates="category",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="CategoryPropertyRecord.position",
    )
    subobject_links: Mapped[list["CategorySubobjectRecord"]] = relationship(
        "CategorySubobjectRecord", back_populates="category",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="CategorySubobjectRecord.position",
    )
