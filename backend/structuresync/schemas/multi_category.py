"""Multi-Category Schemas — request/response contracts for composition and generation.

Invariants:
    - MultiCategoryRequest.categories: "Category:" prefixes stripped (case-insensitive),
      blanks dropped, order kept; an empty list reaches the core and fails there
      with EMPTY_SELECTION
    - Every boolean wire field is an int constrained to 0/1

Design Decisions:
    - Empty selection is not rejected by Pydantic: the domain error carries the
      stable EMPTY_SELECTION code clients match on
"""

from pydantic import BaseModel, Field, field_validator

from structuresync.core.naming import normalize_selection

Flag = int


class MultiCategoryRequest(BaseModel):
    """Ordered category selection; alphabetical=True sorts before composing."""
    categories: list[str] = Field(default_factory=list, max_length=100)
    alphabetical: bool = False

    @field_validator("categories")
    @classmethod
    def strip_prefixes(cls, v: list[str]) -> list[str]:
        return normalize_selection(v)


class PromotionWarningResponse(BaseModel):
    kind: str
    name: str
    category: str
    required_in: list[str]
    optional_in: list[str]
    message: str


class PropertyEntry(BaseModel):
    name: str
    title: str
    datatype: str
    required: Flag = Field(ge=0, le=1)
    multiple: Flag = Field(ge=0, le=1)
    shared: Flag = Field(ge=0, le=1)
    owner: str
    sources: list[str]


class NestedPropertyEntry(BaseModel):
    name: str
    title: str
    datatype: str
    required: Flag = Field(ge=0, le=1)
    multiple: Flag = Field(ge=0, le=1)


class SubobjectEntry(BaseModel):
    name: str
    title: str
    required: Flag = Field(ge=0, le=1)
    shared: Flag = Field(ge=0, le=1)
    owner: str
    sources: list[str]
    properties: list[NestedPropertyEntry] = []


class ComposedSchemaResponse(BaseModel):
    """Composed schema in wire format."""
    categories: list[str]
    properties: list[PropertyEntry]
    subobjects: list[SubobjectEntry]
    warnings: list[PromotionWarningResponse] = []


class GeneratedFieldResponse(BaseModel):
    name: str
    parameter: str
    label: str
    datatype: str
    required: Flag = Field(ge=0, le=1)
    multiple: Flag = Field(ge=0, le=1)
    shared: Flag = Field(ge=0, le=1)
    owner: str
    sources: list[str]
    input_type: str
    input: str


class GeneratedSubobjectResponse(BaseModel):
    name: str
    title: str
    parameter: str
    required: Flag = Field(ge=0, le=1)
    shared: Flag = Field(ge=0, le=1)
    owner: str
    sources: list[str]
    fields: list[GeneratedFieldResponse]


class GenerationUnitResponse(BaseModel):
    category: str
    template: str
    primary: Flag = Field(ge=0, le=1)
    identity_key: str
    fields: list[GeneratedFieldResponse]
    subobjects: list[GeneratedSubobjectResponse]


class RenderedArtifacts(BaseModel):
    form: str
    templates: dict[str, str]
    subobject_templates: dict[str, str]


class GenerateResponse(BaseModel):
    """Composite name, per-category units and their rendered wikitext."""
    name: str
    categories: list[str]
    units: list[GenerationUnitResponse]
    rendered: RenderedArtifacts
    schema_hash: str
    warnings: list[PromotionWarningResponse] = []
