"""Schema Service — validates, imports, exports and diffs schema documents.

Invariants:
    - import_schema never writes an invalid document: validation runs first and
      raises SchemaValidationError carrying every message
    - Seeding only happens into an EMPTY store (never overwrites imported data)
    - export and diff read the stored schema only; diff_schema validates the incoming
      document first, so its diff always describes an importable change
"""

import logging
from pathlib import Path
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from structuresync.core.errors import SchemaValidationError
from structuresync.core.schema_comparer import compare_schemas, diff_summary, has_changes
from structuresync.core.schema_exporter import (
    export_categories, export_document, schema_statistics,
)
from structuresync.core.schema_validator import schema_warnings, validate_schema
from structuresync.infrastructure.schema_loader import load_file
from structuresync.infrastructure.sql_schema_store import (
    count_categories, load_property_entries, load_schema_store, replace_schema,
)

logger = logging.getLogger(__name__)


def check_schema(document: Any) -> dict:
    """Validation report: {valid, errors, warnings}."""
    errors = validate_schema(document)
    warnings = schema_warnings(document) if not errors else []
    return {"valid": not errors, "errors": errors, "warnings": warnings}


async def import_schema(db: AsyncSession, document: Mapping[str, Any]) -> dict:
    """Validate then replace the stored schema. Returns counts and warnings."""
    errors = validate_schema(document)
    if errors:
        logger.warning(
            f"Schema import rejected with {len(errors)} error(s)",
            extra={"error_code": "SCHEMA_INVALID"},
        )
        raise SchemaValidationError(errors)
    imported = await replace_schema(db, document)
    return {"imported": imported, "warnings": schema_warnings(document)}


async def seed_if_empty(db: AsyncSession, path: str | Path) -> dict | None:
    """Import a schema file when no category is stored yet."""
    if await count_categories(db) > 0:
        logger.info("Schema store not empty, seed skipped", extra={"path": str(path)})
        return None
    return await import_schema(db, load_file(path))


# --- Export & diff ---------------------------------------------------------------

async def export_schema(
    db: AsyncSession,
    include_inherited: bool = False,
    categories: list[str] | None = None,
) -> dict:
    """Stored schema as an importable document (optionally a category subset)."""
    store = await load_schema_store(db)
    properties = await load_property_entries(db)
    if categories:
        return export_categories(store, categories, properties, include_inherited)
    return export_document(store, properties, include_inherited)


async def stored_statistics(db: AsyncSession) -> dict[str, int]:
    store = await load_schema_store(db)
    return schema_statistics(store, await load_property_entries(db))


async def check_stored_schema(db: AsyncSession) -> dict:
    """Validation report for the stored schema, run on its export."""
    return check_schema(await export_schema(db))


async def diff_schema(db: AsyncSession, document: Mapping[str, Any]) -> dict:
    """Changes an import of `document` would apply to the stored schema."""
    errors = validate_schema(document)
    if errors:
        logger.warning(
            f"Schema diff rejected with {len(errors)} error(s)",
            extra={"error_code": "SCHEMA_INVALID"},
        )
        raise SchemaValidationError(errors)
    diff = compare_schemas(document, await export_schema(db))
    logger.info("Schema diff computed", extra={"has_changes": has_changes(diff)})
    return {**diff, "has_changes": has_changes(diff), "summary": diff_summary(diff)}
