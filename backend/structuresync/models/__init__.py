"""ORM Models — SQLAlchemy declarative models for the stored schema.

Invariants:
    - All models inherit from Base (db/base.py)
    - Category is the aggregate root for declarations; properties and subobjects
      are global registries referenced by links

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from structuresync.models.property import PropertyRecord  # noqa: F401
from structuresync.models.subobject import SubobjectRecord  # noqa: F401
from structuresync.models.subobject_property import SubobjectPropertyRecord  # noqa: F401
from structuresync.models.category import CategoryRecord  # noqa: F401
from structuresync.models.category_property import CategoryPropertyRecord  # noqa: F401
from structuresync.models.category_subobject import CategorySubobjectRecord  # noqa: F401
