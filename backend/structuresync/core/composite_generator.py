"""Composite Generator — turns a ComposedSchema into ordered, rendering-ready generation units.

Invariants:
    - One GenerationUnit per composed section, same order; the first unit is primary
    - Shared names (declared by 2+ selected categories) are placed in the FIRST unit only;
      later units keep only names exclusive to them (stable partition, section order)
    - Each name lands in exactly one unit (no duplicate form fields)
    - Parameters never repeat inside a unit: a colliding normalized name gets a
      numeric suffix, and subobject holders share the unit's parameter space
    - Every template snippet is guarded: an empty/absent value emits nothing
    - Multi-value fields split on an explicit delimiter shared by template and form
    - composite_name() joins unique category names alphabetically: [A, B] and [B, A]
      always name the same artifact
    - identity_key = "<category>#<sha1 of sorted field + subobject names>"; stable for
      the same unit content, distinct per category on a multi-template page

Design Decisions:
    - Placement is decided by contributors, not by owner: a name shared by the 2nd and
      3rd selected categories still moves to unit 1 (first-section aggregation)
    - hashlib over Python hash(): hash() is salted per process, identity must be stable
"""

import hashlib

from structuresync.core.domain_types import (
    DEFAULT_COMPOSITE_SEPARATOR, DEFAULT_MULTI_VALUE_DELIMITER, IDENTITY_HASH_LENGTH,
)
from structuresync.core.generation_models import (
    CompositeArtifacts, GeneratedField, GeneratedSubobject, GenerationUnit,
)
from structuresync.core.input_mapper import PropertyInputMapper
from structuresync.core.naming import property_to_label, property_to_parameter
from structuresync.core.schema_models import (
    ComposedSchema, PropertyDefinition, SubobjectDefinition,
)


class CompositeGenerator:
    """Generate per-category units and the composite artifact name."""

    def __init__(
        self,
        input_mapper: PropertyInputMapper | None = None,
        delimiter: str = DEFAULT_MULTI_VALUE_DELIMITER,
        name_separator: str = DEFAULT_COMPOSITE_SEPARATOR,
    ):
        self.delimiter = delimiter
        self.name_separator = name_separator
        self._mapper = input_mapper or PropertyInputMapper(delimiter)

    def generate(self, composed: ComposedSchema) -> list[GenerationUnit]:
        """Ordered generation units with shared fields collapsed into the first."""
        if composed.is_empty:
            return []

        first = composed.sections[0].category
        placed_properties: dict[str, list[PropertyDefinition]] = {
            s.category: [] for s in composed.sections
        }
        placed_subobjects: dict[str, list[SubobjectDefinition]] = {
            s.category: [] for s in composed.sections
        }
        for section in composed.sections:
            for prop in section.properties:
                target = first if composed.is_shared_property(prop.name) else section.category
                placed_properties[target].append(prop)
            for subobject in section.subobjects:
                target = first if composed.is_shared_subobject(subobject.name) else section.category
                placed_subobjects[target].append(subobject)

        units = []
        for index, section in enumerate(composed.sections):
            taken: set[str] = set()
            fields = tuple(
                self._property_field(p, composed, taken)
                for p in placed_properties[section.category]
            )
            subobjects = tuple(
                self._subobject(s, composed, taken) for s in placed_subobjects[section.category]
            )
            units.append(GenerationUnit(
                category=section.category,
                fields=fields,
                subobjects=subobjects,
                is_primary=index == 0,
                identity_key=identity_key(section.category, fields, subobjects),
            ))
        return units

    def composite_name(self, category_names: list[str]) -> str:
        """Deterministic artifact name: unique names, alphabetical, joined."""
        return self.name_separator.join(sorted(set(category_names)))

    def build(self, composed: ComposedSchema) -> CompositeArtifacts:
        return CompositeArtifacts(
            name=self.composite_name(composed.category_names),
            units=tuple(self.generate(composed)),
        )

    # --- Field construction ----------------------------------------------------

    def _property_field(
        self, prop: PropertyDefinition, composed: ComposedSchema, taken: set[str],
    ) -> GeneratedField:
        return self._field(
            prop,
            parameter=claim_parameter(prop.name, taken),
            shared=composed.is_shared_property(prop.name),
            owner=composed.property_sources.get(prop.name, ""),
            sources=composed.property_contributors.get(prop.name, ()),
        )

    def _subobject(
        self, subobject: SubobjectDefinition, composed: ComposedSchema, taken: set[str],
    ) -> GeneratedSubobject:
        shared = composed.is_shared_subobject(subobject.name)
        owner = composed.subobject_sources.get(subobject.name, "")
        sources = composed.subobject_contributors.get(subobject.name, ())
        holder = claim_parameter(subobject.name, taken)
        nested_taken: set[str] = set()
        return GeneratedSubobject(
            name=subobject.name,
            required=subobject.required,
            shared=shared,
            owner=owner,
            sources=sources,
            fields=tuple(
                self._field(
                    p, parameter=claim_parameter(p.name, nested_taken),
                    shared=shared, owner=owner, sources=sources,
                )
                for p in subobject.properties
            ),
            parameter=holder,
        )

    def _field(
        self, prop: PropertyDefinition, parameter: str,
        shared: bool, owner: str, sources: tuple[str, ...],
    ) -> GeneratedField:
        definition = self._mapper.input_definition(prop)
        return GeneratedField(
            name=prop.name,
            parameter=parameter,
            label=property_to_label(prop.name),
            datatype=prop.datatype,
            required=prop.required,
            multi_value=prop.multi_value,
            shared=shared,
            owner=owner,
            sources=sources,
            input_type=self._mapper.input_type(prop),
            input_definition=definition,
            template_call=guarded_annotation(
                prop.name, parameter, prop.multi_value, self.delimiter,
            ),
            form_input=f"{{{{{{field|{parameter}|{definition}}}}}}}",
        )


def claim_parameter(name: str, taken: set[str]) -> str:
    """Template parameter for `name`, suffixed "_2", "_3"... when already taken.

    "Has name" and "Name" both normalize to "name"; the second one becomes "name_2".
    """
    base = property_to_parameter(name)
    parameter = base
    suffix = 2
    while parameter in taken:
        parameter = f"{base}_{suffix}"
        suffix += 1
    taken.add(parameter)
    return parameter


def guarded_annotation(
    property_name: str, parameter: str, multi_value: bool, delimiter: str,
) -> str:
    """Semantic annotation emitted only when the parameter has a value."""
    value = f"{{{{{{{parameter}|}}}}}}"
    if multi_value:
        body = (
            f"{{{{#arraymap:{value}|{delimiter}|@@item@@|"
            f"[[{property_name}::@@item@@]]}}}}"
        )
    else:
        body = f"[[{property_name}::{value}]]"
    return f"{{{{#if:{value}|{body}}}}}"


def identity_key(
    category: str,
    fields: tuple[GeneratedField, ...],
    subobjects: tuple[GeneratedSubobject, ...],
) -> str:
    """Per-unit identity: category plus a short digest of its field set."""
    names = sorted(f.name for f in fields) + sorted(f"@{s.name}" for s in subobjects)
    digest = hashlib.sha1("\n".join(names).encode("utf-8")).hexdigest()
    return f"{category}#{digest[:IDENTITY_HASH_LENGTH]}"
