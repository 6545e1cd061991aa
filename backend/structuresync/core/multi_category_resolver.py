"""Multi-Category Resolver — composes several effective schemas into one deduplicated schema.

Invariants:
    - Empty selection raises EmptySelectionError before any lookup
    - Every selected category is resolved BEFORE composition: one UnknownCategoryError
      or CyclicInheritanceError aborts the whole request (no partial ComposedSchema)
    - First owner wins: the first category (input order) declaring a name owns it and
      is recorded in the source map; later declarations are dropped from their section
    - Dropped declarations still vote in the {optional < required} merge, so a later
      required declaration promotes the owner's copy (with a PromotionWarning)
    - A later subobject declaration is folded into the owner's copy: extra nested
      properties are appended and nested flags promoted ("Subobject/property" warnings)
    - Properties and subobjects go through the SAME compose function
    - Sections follow input order; no implicit sorting (callers pre-sort UI selections)
    - Repeated names in the selection collapse to their first occurrence

Design Decisions:
    - Composition over inheritance: holds an InheritanceResolver, never subclasses it
      (ADR: category hierarchy is data, not code structure)
"""

from typing import Callable, Sequence, TypeVar

from structuresync.core.domain_types import DeclarationKind
from structuresync.core.errors import EmptySelectionError, StructureSyncError
from structuresync.core.inheritance_resolver import (
    InheritanceResolver, merge_subobject, nested_property_warnings,
)
from structuresync.core.requirement_merge import (
    Declaration, merge_requirement, promotion_warning,
)
from structuresync.core.schema_models import (
    CategorySection, ComposedSchema, EffectiveSchema, PromotionWarning,
    PropertyDefinition, SubobjectDefinition,
)

T = TypeVar("T", PropertyDefinition, SubobjectDefinition)


class MultiCategoryResolver:
    """Compose independently-inherited schemas with source attribution."""

    def __init__(self, inheritance_resolver: InheritanceResolver):
        self._inheritance = inheritance_resolver

    def resolve(self, category_names: Sequence[str]) -> ComposedSchema:
        """Composed schema for an ordered selection of categories."""
        if not category_names:
            raise EmptySelectionError()

        selection = list(dict.fromkeys(category_names))
        effective = [self._resolve_one(name, selection) for name in selection]

        properties, property_sources, property_contributors, property_warnings = compose(
            effective, DeclarationKind.PROPERTY, lambda e: e.properties,
        )
        subobjects, subobject_sources, subobject_contributors, subobject_warnings = compose(
            effective, DeclarationKind.SUBOBJECT, lambda e: e.subobjects, merge_subobject,
        )
        nested_warnings = nested_property_warnings(
            [(e.category, e.subobjects) for e in effective], subobject_sources.__getitem__,
        )

        sections = tuple(
            CategorySection(
                category=e.category,
                properties=tuple(properties[e.category]),
                subobjects=tuple(subobjects[e.category]),
            )
            for e in effective
        )
        inherited_warnings = [w for e in effective for w in e.warnings]

        return ComposedSchema(
            sections=sections,
            property_sources=property_sources,
            subobject_sources=subobject_sources,
            property_contributors=property_contributors,
            subobject_contributors=subobject_contributors,
            warnings=tuple(
                inherited_warnings + property_warnings + subobject_warnings + nested_warnings
            ),
        )

    def _resolve_one(self, name: str, selection: list[str]) -> EffectiveSchema:
        try:
            return self._inheritance.resolve(name)
        except StructureSyncError as e:
            e.context.selection = selection
            raise


def compose(
    effective: Sequence[EffectiveSchema],
    kind: DeclarationKind,
    items_of: Callable[[EffectiveSchema], Sequence[T]],
    fold: Callable[[T, T], T] | None = None,
) -> tuple[dict[str, list[T]], dict[str, str], dict[str, tuple[str, ...]], list[PromotionWarning]]:
    """First-owner-wins dedup with cross-category promotion.

    Returns (items per category, name → owner, name → contributors, warnings).
    `fold` merges a later declaration into the owned copy (nested subobject
    properties); without it later declarations only vote on the required flag.
    """
    owners: dict[str, str] = {}
    owned: dict[str, T] = {}
    declarations: dict[str, list[Declaration]] = {}

    for schema in effective:
        for item in items_of(schema):
            if item.name not in owners:
                owners[item.name] = schema.category
                owned[item.name] = item
            elif fold is not None:
                owned[item.name] = fold(owned[item.name], item)
            declarations.setdefault(item.name, []).append(
                Declaration(source=schema.category, required=item.required),
            )

    per_category: dict[str, list[T]] = {e.category: [] for e in effective}
    contributors: dict[str, tuple[str, ...]] = {}
    warnings = []
    for name, owner in owners.items():
        merged = merge_requirement(declarations[name])
        per_category[owner].append(owned[name].with_required(merged.required))
        contributors[name] = tuple(dict.fromkeys(d.source for d in declarations[name]))
        warning = promotion_warning(kind, name, owner, merged)
        if warning:
            warnings.append(warning)
    return per_category, owners, contributors, warnings
