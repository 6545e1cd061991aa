"""Schema Models — immutable value objects flowing through the resolution pipeline.

Invariants:
    - All models are frozen dataclasses: resolvers build new values, never mutate inputs
    - Sequences are tuples in declaration order (ordering is part of the contract)
    - A PromotionWarning message always contains "promoted to required"
    - ComposedSchema: every property/subobject name appears in exactly one section

Design Decisions:
    - Dataclasses over Pydantic in core: no validation cost inside the pure pipeline,
      Pydantic stays at the API boundary (ADR: DDD boundary)
    - Properties and subobjects share one merge path; DeclarationKind tags warnings
"""

from dataclasses import dataclass, field, replace

from structuresync.core.domain_types import Datatype, DeclarationKind, PROMOTION_WORDING


@dataclass(frozen=True)
class PropertyDefinition:
    """One property declaration: name, datatype, required and multi-value flags."""
    name: str
    datatype: Datatype = Datatype.PAGE
    required: bool = False
    multi_value: bool = False

    def with_required(self, required: bool) -> "PropertyDefinition":
        return replace(self, required=required)


@dataclass(frozen=True)
class SubobjectDefinition:
    """Named nested group of properties, attached to a category as required or optional."""
    name: str
    properties: tuple[PropertyDefinition, ...] = ()
    required: bool = False

    def with_required(self, required: bool) -> "SubobjectDefinition":
        return replace(self, required=required)


@dataclass(frozen=True)
class CategorySchema:
    """Raw per-category schema as supplied by the schema store."""
    name: str
    properties: tuple[PropertyDefinition, ...] = ()
    subobjects: tuple[SubobjectDefinition, ...] = ()
    parent: str | None = None
    label: str = ""
    description: str = ""

    @property
    def display_label(self) -> str:
        return self.label or self.name


@dataclass(frozen=True)
class PromotionWarning:
    """Non-fatal record of an optional declaration silently promoted to required."""
    kind: DeclarationKind
    name: str
    category: str
    required_in: tuple[str, ...]
    optional_in: tuple[str, ...]

    @property
    def message(self) -> str:
        return (
            f"{self.kind.value.capitalize()} '{self.name}' {PROMOTION_WORDING} "
            f"(required in {', '.join(self.required_in)}; "
            f"optional in {', '.join(self.optional_in)})"
        )

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "category": self.category,
            "required_in": list(self.required_in),
            "optional_in": list(self.optional_in),
            "message": self.message,
        }


@dataclass(frozen=True)
class EffectiveSchema:
    """A category's schema merged with every ancestor, after promotion."""
    category: str
    properties: tuple[PropertyDefinition, ...] = ()
    subobjects: tuple[SubobjectDefinition, ...] = ()
    parent: str | None = None
    ancestry: tuple[str, ...] = ()
    property_origins: dict[str, str] = field(default_factory=dict)
    subobject_origins: dict[str, str] = field(default_factory=dict)
    warnings: tuple[PromotionWarning, ...] = ()

    def get_property(self, name: str) -> PropertyDefinition | None:
        return next((p for p in self.properties if p.name == name), None)

    def get_subobject(self, name: str) -> SubobjectDefinition | None:
        return next((s for s in self.subobjects if s.name == name), None)

    @property
    def required_properties(self) -> list[str]:
        return [p.name for p in self.properties if p.required]

    @property
    def optional_properties(self) -> list[str]:
        return [p.name for p in self.properties if not p.required]


@dataclass(frozen=True)
class CategorySection:
    """The exclusively-owned slice of one selected category in a composed schema."""
    category: str
    properties: tuple[PropertyDefinition, ...] = ()
    subobjects: tuple[SubobjectDefinition, ...] = ()


@dataclass(frozen=True)
class ComposedSchema:
    """Several effective schemas merged with first-owner-wins dedup and attribution."""
    sections: tuple[CategorySection, ...] = ()
    property_sources: dict[str, str] = field(default_factory=dict)
    subobject_sources: dict[str, str] = field(default_factory=dict)
    property_contributors: dict[str, tuple[str, ...]] = field(default_factory=dict)
    subobject_contributors: dict[str, tuple[str, ...]] = field(default_factory=dict)
    warnings: tuple[PromotionWarning, ...] = ()

    @property
    def category_names(self) -> list[str]:
        return [s.category for s in self.sections]

    @property
    def is_empty(self) -> bool:
        return not self.sections

    def all_properties(self) -> list[PropertyDefinition]:
        """Every property once, in section order."""
        return [p for s in self.sections for p in s.properties]

    def all_subobjects(self) -> list[SubobjectDefinition]:
        """Every subobject once, in section order."""
        return [so for s in self.sections for so in s.subobjects]

    def is_shared_property(self, name: str) -> bool:
        return len(self.property_contributors.get(name, ())) > 1

    def is_shared_subobject(self, name: str) -> bool:
        return len(self.subobject_contributors.get(name, ())) > 1
