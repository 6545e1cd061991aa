"""CategoryProperty ORM — one property declaration inside a category.

Invariants:
    - (category_id, property_id) is unique: a category declares a property once
    - required is the category's own stance, before any inheritance or composition merge
"""

import uuid

from sqlalchemy import Boolean, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from structuresync.db.base import Base


class CategoryPropertyRecord(Base):
    __tablename__ = "category_properties"
    __table_args__ = (UniqueConstraint("category_id", "property_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
    )
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    category: Mapped["CategoryRecord"] = relationship(
        "CategoryRecord", back_populates="property_links",
    )
    property_record: Mapped["PropertyRecord"] = relationship(
        "PropertyRecord", lazy="selectin",
    )
