"""Property ORM — persists the global property registry.

Invariants:
    - name is unique: a property has exactly one datatype across every category
    - datatype stores the wiki type label ("Page", "Text", ...); unknown labels
      resolve to Page when loaded
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from structuresync.db.base import Base


class PropertyRecord(Base):
    """Property entity — one named, typed attribute."""
    __tablename__ = "properties"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    datatype: Mapped[str] = mapped_column(
        String(50), nullable=False, default="Page",
    )
    allows_multiple_values: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
