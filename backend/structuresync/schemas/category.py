"""Category Schemas — responses for single-category effective schema and hierarchy views."""

from pydantic import BaseModel, Field

from structuresync.schemas.multi_category import (
    NestedPropertyEntry, PromotionWarningResponse,
)


class EffectivePropertyEntry(NestedPropertyEntry):
    source: str


class EffectiveSubobjectEntry(BaseModel):
    name: str
    title: str
    required: int = Field(ge=0, le=1)
    source: str
    properties: list[NestedPropertyEntry] = []


class EffectiveSchemaResponse(BaseModel):
    category: str
    parent: str | None = None
    ancestry: list[str]
    properties: list[EffectivePropertyEntry]
    subobjects: list[EffectiveSubobjectEntry]
    warnings: list[PromotionWarningResponse] = []


class HierarchyNode(BaseModel):
    title: str
    parents: list[str]


class InheritedProperty(BaseModel):
    propertyTitle: str
    sourceCategory: str
    required: int = Field(ge=0, le=1)


class InheritedSubobject(BaseModel):
    subobjectTitle: str
    sourceCategory: str
    required: int = Field(ge=0, le=1)


class HierarchyResponse(BaseModel):
    """Ancestor tree plus inherited declarations, keyed by namespaced titles."""
    rootCategory: str
    nodes: dict[str, HierarchyNode]
    inheritedProperties: list[InheritedProperty]
    inheritedSubobjects: list[InheritedSubobject]


class CategoryListResponse(BaseModel):
    categories: list[str]
