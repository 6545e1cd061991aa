"""SubobjectProperty ORM — one property declaration inside a subobject."""

import uuid

from sqlalchemy import Boolean, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from structuresync.db.base import Base


class SubobjectPropertyRecord(Base):
    __tablename__ = "subobject_properties"
    __table_args__ = (UniqueConstraint("subobject_id", "property_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    subobject_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("subobjects.id", ondelete="CASCADE"),
        nullable=False,
    )
    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
    )
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    subobject: Mapped["SubobjectRecord"] = relationship(
        "SubobjectRecord", back_populates="property_links",
    )
    property_record: Mapped["PropertyRecord"] = relationship(
        "PropertyRecord", lazy="selectin",
    )
