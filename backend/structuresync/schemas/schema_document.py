"""Schema Document Schemas — responses for schema import, validation, statistics and diff.

Invariants:
    - The request body is free-form (JSON object or YAML text): structural checks belong
      to core/schema_validator.py so that messages are identical for files and requests
"""

from typing import Any

from pydantic import BaseModel


class SchemaValidationResponse(BaseModel):
    valid: bool
    errors: list[str]
    warnings: list[str] = []


class SchemaImportResponse(BaseModel):
    imported: dict[str, int]
    warnings: list[str] = []


class SchemaStatisticsResponse(BaseModel):
    categoryCount: int
    propertyCount: int
    subobjectCount: int
    categoriesWithParents: int
    categoriesWithProperties: int
    categoriesWithSubobjects: int


class ModifiedEntry(BaseModel):
    name: str
    changes: dict[str, dict[str, Any]]


class SectionDiff(BaseModel):
    added: list[str]
    removed: list[str]
    modified: list[ModifiedEntry]
    unchanged: list[str]


class SchemaDiffResponse(BaseModel):
    categories: SectionDiff
    properties: SectionDiff
    subobjects: SectionDiff
    has_changes: bool
    summary: str
