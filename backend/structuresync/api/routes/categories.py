"""Category Routes — effective schema and hierarchy view for one category.

Invariants:
    - Path names may carry a "Category:" prefix; it is stripped before lookup
    - Unknown category → 404 UNKNOWN_CATEGORY, cycle → 422 CYCLIC_INHERITANCE
    - Read-only: no edit permission required
"""

import logging

from fastapi import APIRouter, Depends

from structuresync.api.dependencies import get_composition_service
from structuresync.core.naming import strip_category_prefix
from structuresync.schemas.category import (
    CategoryListResponse, EffectiveSchemaResponse, HierarchyResponse,
)
from structuresync.services.composition_service import CompositionService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    service: CompositionService = Depends(get_composition_service),
):
    return {"categories": service.category_names()}


@router.get("/{name}", response_model=EffectiveSchemaResponse)
async def get_effective_schema(
    name: str, service: CompositionService = Depends(get_composition_service),
):
    """Category schema merged with every ancestor, plus promotion warnings."""
    return service.effective_schema(strip_category_prefix(name))


@router.get("/{name}/hierarchy", response_model=HierarchyResponse)
async def get_hierarchy(
    name: str, service: CompositionService = Depends(get_composition_service),
):
    return service.hierarchy(strip_category_prefix(name))
