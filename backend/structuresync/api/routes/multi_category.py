"""Multi-Category Routes — composed schema preview and composite artifact generation.

Invariants:
    - Any unresolvable category fails the WHOLE request (no partial result)
    - resolve is read-only; generate requires edit permission
    - Boolean wire fields are 1/0

Design Decisions:
    - Generation returns rendered text instead of writing wiki pages: page
      persistence belongs to the caller (ADR: core never writes to the store)
"""

import logging

from fastapi import APIRouter, Depends

from structuresync.api.dependencies import get_composition_service, require_edit_permission
from structuresync.schemas.multi_category import (
    ComposedSchemaResponse, GenerateResponse, MultiCategoryRequest,
)
from structuresync.services.composition_service import CompositionService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/multi-category", tags=["multi-category"])


@router.post("/resolve", response_model=ComposedSchemaResponse)
async def resolve_categories(
    body: MultiCategoryRequest,
    service: CompositionService = Depends(get_composition_service),
):
    """Composed, deduplicated schema for a category selection."""
    return service.resolve(body.categories, body.alphabetical)


@router.post(
    "/generate", response_model=GenerateResponse,
    dependencies=[Depends(require_edit_permission("generate composite artifacts"))],
)
async def generate_composite(
    body: MultiCategoryRequest,
    service: CompositionService = Depends(get_composition_service),
):
    """Composite name, generation units, templates and form for a selection."""
    result = service.generate(body.categories, body.alphabetical)
    logger.info(
        f"Composite {result['name']} generated",
        extra={"categories": result["categories"], "composite": result["name"]},
    )
    return result
