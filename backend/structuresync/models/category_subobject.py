"""CategorySubobject ORM — attaches a subobject to a category as required or optional.

Invariants:
    - (category_id, subobject_id) is unique
"""

import uuid

from sqlalchemy import Boolean, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from structuresync.db.base import Base


class CategorySubobjectRecord(Base):
    __tablename__ = "category_subobjects"
    __table_args__ = (UniqueConstraint("category_id", "subobject_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    subobject_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("subobjects.id", ondelete="CASCADE"),
        nullable=False,
    )
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    category: Mapped["CategoryRecord"] = relationship(
        "CategoryRecord", back_populates="subobject_links",
    )
    subobject: Mapped["SubobjectRecord"] = relationship(
        "SubobjectRecord", lazy="selectin",
    )
