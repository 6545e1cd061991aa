"""Inheritance Resolver — merges a category schema with its single-parent ancestor chain.

Invariants:
    - resolve() raises UnknownCategoryError for a missing category or missing ancestor
    - resolve() raises CyclicInheritanceError when a category reappears in its own chain;
      traversal therefore visits at most len(store) categories
    - Merge runs root → requested category: ancestor names first (position of first
      appearance), then the category's own new names; declaration order kept per level
    - Descendant declarations override datatype / multi-value and extend nested
      subobject property lists; the required flag is the lattice max over all levels
    - Promotion never raises: it is returned as PromotionWarning on the EffectiveSchema
    - No caching: every call reads the store afresh (store contents define the result)

Design Decisions:
    - Single-parent walk instead of C3 linearization: category chains are single
      inheritance by construction (ADR: no general graph inheritance)
    - Categories are data, not Python classes: the resolver walks `parent` names
"""

from dataclasses import replace
from typing import Callable, Sequence, TypeVar

from structuresync.core.domain_types import DeclarationKind
from structuresync.core.errors import CyclicInheritanceError, UnknownCategoryError
from structuresync.core.repository_protocols import SchemaStore
from structuresync.core.requirement_merge import (
    Declaration, merge_requirement, promotion_warning,
)
from structuresync.core.schema_models import (
    CategorySchema, EffectiveSchema, PromotionWarning,
    PropertyDefinition, SubobjectDefinition,
)

T = TypeVar("T", PropertyDefinition, SubobjectDefinition)


class InheritanceResolver:
    """Resolve effective schemas from a read-only schema store."""

    def __init__(self, store: SchemaStore):
        self._store = store

    def resolve(self, category_name: str) -> EffectiveSchema:
        """Effective schema for one category, merged with every ancestor."""
        chain = self.ancestors(category_name)
        levels = [self._require(name) for name in chain]

        properties, property_origins, property_warnings = merge_levels(
            levels, category_name, DeclarationKind.PROPERTY,
            lambda schema: schema.properties, _override_property,
        )
        subobjects, subobject_origins, subobject_warnings = merge_levels(
            levels, category_name, DeclarationKind.SUBOBJECT,
            lambda schema: schema.subobjects, merge_subobject,
        )
        nested_warnings = nested_property_warnings(
            [(schema.name, schema.subobjects) for schema in levels], lambda _: category_name,
        )

        return EffectiveSchema(
            category=category_name,
            properties=properties,
            subobjects=subobjects,
            parent=levels[-1].parent,
            ancestry=tuple(chain),
            property_origins=property_origins,
            subobject_origins=subobject_origins,
            warnings=tuple(property_warnings + subobject_warnings + nested_warnings),
        )

    def ancestors(self, category_name: str) -> list[str]:
        """Root-first chain of category names, ending with category_name itself."""
        current = self._require(category_name)
        upward = [category_name]
        while current.parent:
            parent_name = current.parent
            if parent_name in upward:
                raise CyclicInheritanceError(upward + [parent_name])
            current = self._require(parent_name, referenced_by=current.name)
            upward.append(parent_name)
        return list(reversed(upward))

    def is_ancestor_of(self, ancestor: str, category_name: str) -> bool:
        """Whether `ancestor` appears strictly above `category_name` in its chain."""
        return ancestor in self.ancestors(category_name)[:-1]

    def validate_inheritance(self) -> list[str]:
        """Every broken chain in the store as a message; never raises."""
        errors = []
        for name in self._store.category_names():
            try:
                self.ancestors(name)
            except (CyclicInheritanceError, UnknownCategoryError) as e:
                errors.append(f"{name}: {e.message}")
        return errors

    def _require(self, category_name: str, referenced_by: str | None = None) -> CategorySchema:
        schema = self._store.get_schema(category_name)
        if schema is None:
            raise UnknownCategoryError(category_name, referenced_by=referenced_by)
        return schema


# --- Merge helpers -------------------------------------------------------------

def merge_levels(
    levels: Sequence[CategorySchema],
    category_name: str,
    kind: DeclarationKind,
    items_of: Callable[[CategorySchema], Sequence[T]],
    override: Callable[[T, T], T],
) -> tuple[tuple[T, ...], dict[str, str], list[PromotionWarning]]:
    """Fold root-first levels into one ordered, promoted item list.

    Returns (items, origins, warnings) where origins maps each name to the
    level that first declared it.
    """
    origins: dict[str, str] = {}
    latest: dict[str, T] = {}
    declarations: dict[str, list[Declaration]] = {}

    for schema in levels:
        for item in items_of(schema):
            if item.name not in origins:
                origins[item.name] = schema.name
                latest[item.name] = item
            else:
                latest[item.name] = override(latest[item.name], item)
            declarations.setdefault(item.name, []).append(
                Declaration(source=schema.name, required=item.required),
            )

    items = []
    warnings = []
    for name in origins:
        merged = merge_requirement(declarations[name])
        items.append(latest[name].with_required(merged.required))
        warning = promotion_warning(kind, name, category_name, merged)
        if warning:
            warnings.append(warning)
    return tuple(items), origins, warnings


def _override_property(
    previous: PropertyDefinition, current: PropertyDefinition,
) -> PropertyDefinition:
    return replace(previous, datatype=current.datatype, multi_value=current.multi_value)


def merge_subobject(
    previous: SubobjectDefinition, current: SubobjectDefinition,
) -> SubobjectDefinition:
    return replace(
        previous, properties=merge_nested_properties(previous.properties, current.properties),
    )


def merge_nested_properties(
    previous: Sequence[PropertyDefinition], current: Sequence[PropertyDefinition],
) -> tuple[PropertyDefinition, ...]:
    """Union of two subobject property lists; earlier order kept, flags promoted."""
    merged: dict[str, PropertyDefinition] = {p.name: p for p in previous}
    for prop in current:
        existing = merged.get(prop.name)
        if existing is None:
            merged[prop.name] = prop
        else:
            merged[prop.name] = replace(
                _override_property(existing, prop),
                required=existing.required or prop.required,
            )
    return tuple(merged.values())


def nested_property_warnings(
    declared: Sequence[tuple[str, Sequence[SubobjectDefinition]]],
    category_for: Callable[[str], str],
) -> list[PromotionWarning]:
    """Promotions inside subobjects declared by more than one source.

    `declared` pairs each source (ancestor level or selected category) with its
    subobjects; `category_for` names the category a subobject's warning belongs to.
    Warnings are named "<subobject>/<property>".
    """
    declarations: dict[tuple[str, str], list[Declaration]] = {}
    for source, subobjects in declared:
        for subobject in subobjects:
            for prop in subobject.properties:
                declarations.setdefault((subobject.name, prop.name), []).append(
                    Declaration(source=source, required=prop.required),
                )
    warnings = []
    for (subobject_name, prop_name), decls in declarations.items():
        warning = promotion_warning(
            DeclarationKind.PROPERTY, f"{subobject_name}/{prop_name}",
            category_for(subobject_name), merge_requirement(decls),
        )
        if warning:
            warnings.append(warning)
    return warnings
