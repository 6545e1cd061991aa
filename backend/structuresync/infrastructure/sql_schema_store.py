"""SQL Schema Store — loads and replaces the stored schema through an async session.

Invariants:
    - load_schema_store returns an immutable snapshot; the core never sees a session
    - replace_schema is all-or-nothing: the previous schema is deleted and the new one
      inserted in ONE transaction (rollback on failure via DatabaseSessionManager)
    - Properties referenced by a declaration but absent from the registry are created
      with datatype Page (same fallback as the in-memory document path)
    - Declaration order is persisted through position columns

Design Decisions:
    - Whole-snapshot load per request: schemas are small and read-mostly, and a snapshot
      keeps the resolvers synchronous and pure (ADR: functional core / imperative shell)
"""

import logging
from typing import Any, Mapping

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from structuresync.core.domain_types import Datatype
from structuresync.core.naming import strip_category_prefix
from structuresync.core.schema_document import category_parent, iter_declarations
from structuresync.core.schema_exporter import property_entry
from structuresync.core.schema_models import (
    CategorySchema, PropertyDefinition, SubobjectDefinition,
)
from structuresync.core.schema_store import InMemorySchemaStore
from structuresync.models import (
    CategoryPropertyRecord, CategoryRecord, CategorySubobjectRecord,
    PropertyRecord, SubobjectPropertyRecord, SubobjectRecord,
)

logger = logging.getLogger(__name__)


# --- Load ----------------------------------------------------------------------

async def load_schema_store(db: AsyncSession) -> InMemorySchemaStore:
    """Snapshot of every stored category, ready for the resolvers."""
    result = await db.execute(select(CategoryRecord).order_by(CategoryRecord.name))
    return InMemorySchemaStore(_to_schema(c) for c in result.scalars().all())


async def count_categories(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(CategoryRecord))
    return result.scalar_one()


async def load_property_entries(db: AsyncSession) -> dict[str, dict]:
    """Stored property registry in schema document shape, labels included."""
    result = await db.execute(select(PropertyRecord).order_by(PropertyRecord.name))
    return {
        record.name: property_entry(
            _to_property(record, required=False), record.label, record.description,
        )
        for record in result.scalars().all()
    }


def _to_property(record: PropertyRecord, required: bool) -> PropertyDefinition:
    return PropertyDefinition(
        name=record.name,
        datatype=Datatype.parse(record.datatype),
        required=required,
        multi_value=record.allows_multiple_values,
    )


def _to_schema(record: CategoryRecord) -> CategorySchema:
    return CategorySchema(
        name=record.name,
        properties=tuple(
            _to_property(link.property_record, link.required)
            for link in record.property_links
        ),
        subobjects=tuple(
            SubobjectDefinition(
                name=link.subobject.name,
                properties=tuple(
                    _to_property(p.property_record, p.required)
                    for p in link.subobject.property_links
                ),
                required=link.required,
            )
            for link in record.subobject_links
        ),
        parent=record.parent_name,
        label=record.label or "",
        description=record.description or "",
    )


# --- Replace -------------------------------------------------------------------

async def replace_schema(db: AsyncSession, document: Mapping[str, Any]) -> dict[str, int]:
    """Replace the stored schema with a (validated) document. Returns row counts."""
    for model in (
        CategorySubobjectRecord, CategoryPropertyRecord, SubobjectPropertyRecord,
        CategoryRecord, SubobjectRecord, PropertyRecord,
    ):
        await db.execute(delete(model))

    properties: dict[str, PropertyRecord] = {}
    for name, data in (document.get("properties") or {}).items():
        data = data or {}
        properties[name] = PropertyRecord(
            name=name,
            datatype=Datatype.parse(data.get("datatype")).value,
            allows_multiple_values=bool(data.get("allowsMultipleValues", False)),
            label=data.get("label"),
            description=data.get("description"),
        )

    def property_record(name: str) -> PropertyRecord:
        if name not in properties:
            properties[name] = PropertyRecord(name=name, datatype=Datatype.PAGE.value)
        return properties[name]

    subobjects: dict[str, SubobjectRecord] = {}
    for name, data in (document.get("subobjects") or {}).items():
        data = data or {}
        subobjects[name] = SubobjectRecord(
            name=name,
            label=data.get("label"),
            property_links=[
                SubobjectPropertyRecord(
                    property_record=property_record(prop), required=required, position=i,
                )
                for i, (prop, required) in enumerate(_unique_declarations(data.get("properties")))
            ],
        )

    def subobject_record(name: str) -> SubobjectRecord:
        if name not in subobjects:
            subobjects[name] = SubobjectRecord(name=name)
        return subobjects[name]

    categories = []
    for name, data in (document.get("categories") or {}).items():
        data = data or {}
        categories.append(CategoryRecord(
            name=strip_category_prefix(name),
            parent_name=category_parent(data),
            label=data.get("label"),
            description=data.get("description"),
            property_links=[
                CategoryPropertyRecord(
                    property_record=property_record(prop), required=required, position=i,
                )
                for i, (prop, required) in enumerate(_unique_declarations(data.get("properties")))
            ],
            subobject_links=[
                CategorySubobjectRecord(
                    subobject=subobject_record(sub), required=required, position=i,
                )
                for i, (sub, required) in enumerate(_unique_declarations(data.get("subobjects")))
            ],
        ))

    db.add_all(list(properties.values()))
    db.add_all(list(subobjects.values()))
    db.add_all(categories)
    await db.commit()

    counts = {
        "categories": len(categories),
        "properties": len(properties),
        "subobjects": len(subobjects),
    }
    logger.info("Schema replaced", extra={"categories": sorted(c.name for c in categories)})
    return counts


def _unique_declarations(declared: Any) -> list[tuple[str, bool]]:
    """First declaration of each name; links are unique per owner."""
    seen: dict[str, bool] = {}
    for name, required in iter_declarations(declared):
        seen.setdefault(name, required)
    return list(seen.items())
