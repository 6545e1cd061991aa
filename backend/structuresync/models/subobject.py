"""Subobject ORM — persists a named, reusable group of properties.

Invariants:
    - name is unique
    - Property links are owned by the subobject (cascade delete), ordered by position
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from structuresync.db.base import Base


class SubobjectRecord(Base):
    """Subobject entity — nested property group attachable to categories."""
    __tablename__ = "subobjects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    property_links: Mapped[list["SubobjectPropertyRecord"]] = relationship(
        "SubobjectPropertyRecord", back_populates="subobject",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="SubobjectPropertyRecord.position",
    )
