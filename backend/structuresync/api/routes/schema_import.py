"""Schema Routes — validate, import, export and diff schema documents (JSON or YAML).

Invariants:
    - YAML is read when the Content-Type mentions yaml; otherwise the body is JSON
    - Unparseable body → 400 SCHEMA_LOAD_FAILED; invalid document → 400 SCHEMA_INVALID
      with every message under error.details
    - import replaces the whole stored schema and requires edit permission
    - export, statistics, check and diff are read-only and never touch the stored schema
    - An exported document can be posted back to /import unchanged
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from structuresync.api.dependencies import require_edit_permission
from structuresync.core.errors import SchemaLoadError
from structuresync.infrastructure.database import get_db
from structuresync.infrastructure.schema_loader import (
    DocumentFormat, dump_document, parse_document,
)
from structuresync.schemas.schema_document import (
    SchemaDiffResponse, SchemaImportResponse, SchemaStatisticsResponse,
    SchemaValidationResponse,
)
from structuresync.services.schema_service import (
    check_schema, check_stored_schema, diff_schema, export_schema, import_schema,
    stored_statistics,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/schema", tags=["schema"])

_MEDIA_TYPES = {
    DocumentFormat.JSON: "application/json",
    DocumentFormat.YAML: "application/x-yaml",
}


async def _read_document(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    fmt = DocumentFormat.YAML if "yaml" in content_type else DocumentFormat.JSON
    try:
        body = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        raise SchemaLoadError("body is not UTF-8 text", "request body")
    return parse_document(body, fmt, source="request body")


@router.post("/validate", response_model=SchemaValidationResponse)
async def validate_document(request: Request):
    return check_schema(await _read_document(request))


@router.post(
    "/import", response_model=SchemaImportResponse,
    dependencies=[Depends(require_edit_permission("import a schema"))],
)
async def import_document(request: Request, db: AsyncSession = Depends(get_db)):
    """Validate, then replace the stored schema with the document."""
    return await import_schema(db, await _read_document(request))


@router.get("/export")
async def export_document(
    include_inherited: bool = False,
    categories: list[str] | None = Query(None),
    format: DocumentFormat = DocumentFormat.JSON,
    db: AsyncSession = Depends(get_db),
):
    """Stored schema as an importable document; `categories` narrows it to a subset."""
    document = await export_schema(db, include_inherited, categories)
    return Response(
        content=dump_document(document, format),
        media_type=_MEDIA_TYPES[format],
    )


@router.get("/statistics", response_model=SchemaStatisticsResponse)
async def schema_statistics(db: AsyncSession = Depends(get_db)):
    return await stored_statistics(db)


@router.get("/check", response_model=SchemaValidationResponse)
async def check_stored(db: AsyncSession = Depends(get_db)):
    """Re-validate the stored schema (errors and warnings)."""
    return await check_stored_schema(db)


@router.post("/diff", response_model=SchemaDiffResponse)
async def diff_document(request: Request, db: AsyncSession = Depends(get_db)):
    """What importing the posted document would change; nothing is written."""
    return await diff_schema(db, await _read_document(request))
