"""Wire Format — JSON-ready dicts for resolution and generation results.

Invariants:
    - Boolean fields (required, multiple, shared, primary) are integers 1/0
    - Titles carry the namespace ("Property:X", "Subobject:X"); names never do
    - List order mirrors the composed/effective order (no re-sorting here)
"""

from typing import Iterable

from structuresync.core.generation_models import (
    GeneratedField, GeneratedSubobject, GenerationUnit,
)
from structuresync.core.naming import property_title, subobject_title
from structuresync.core.schema_models import (
    ComposedSchema, EffectiveSchema, PromotionWarning, PropertyDefinition,
)


def format_properties(composed: ComposedSchema) -> list[dict]:
    return [
        {
            "name": p.name,
            "title": property_title(p.name),
            "datatype": p.datatype.value,
            "required": int(p.required),
            "multiple": int(p.multi_value),
            "shared": int(composed.is_shared_property(p.name)),
            "owner": composed.property_sources[p.name],
            "sources": list(composed.property_contributors.get(p.name, ())),
        }
        for p in composed.all_properties()
    ]


def format_subobjects(composed: ComposedSchema) -> list[dict]:
    return [
        {
            "name": s.name,
            "title": subobject_title(s.name),
            "required": int(s.required),
            "shared": int(composed.is_shared_subobject(s.name)),
            "owner": composed.subobject_sources[s.name],
            "sources": list(composed.subobject_contributors.get(s.name, ())),
            "properties": [_nested_property(p) for p in s.properties],
        }
        for s in composed.all_subobjects()
    ]


def format_composed(composed: ComposedSchema) -> dict:
    return {
        "categories": composed.category_names,
        "properties": format_properties(composed),
        "subobjects": format_subobjects(composed),
        "warnings": format_warnings(composed.warnings),
    }


def format_effective(effective: EffectiveSchema) -> dict:
    return {
        "category": effective.category,
        "parent": effective.parent,
        "ancestry": list(effective.ancestry),
        "properties": [
            {
                **_nested_property(p),
                "source": effective.property_origins[p.name],
            }
            for p in effective.properties
        ],
        "subobjects": [
            {
                "name": s.name,
                "title": subobject_title(s.name),
                "required": int(s.required),
                "source": effective.subobject_origins[s.name],
                "properties": [_nested_property(p) for p in s.properties],
            }
            for s in effective.subobjects
        ],
        "warnings": format_warnings(effective.warnings),
    }


def format_warnings(warnings: Iterable[PromotionWarning]) -> list[dict]:
    return [w.to_dict() for w in warnings]


def format_units(units: list[GenerationUnit]) -> list[dict]:
    return [
        {
            "category": u.category,
            "template": u.template_name,
            "primary": int(u.is_primary),
            "identity_key": u.identity_key,
            "fields": [_field(f) for f in u.fields],
            "subobjects": [_subobject(s) for s in u.subobjects],
        }
        for u in units
    ]


def _nested_property(p: PropertyDefinition) -> dict:
    return {
        "name": p.name,
        "title": property_title(p.name),
        "datatype": p.datatype.value,
        "required": int(p.required),
        "multiple": int(p.multi_value),
    }


def _field(f: GeneratedField) -> dict:
    return {
        "name": f.name,
        "parameter": f.parameter,
        "label": f.label,
        "datatype": f.datatype.value,
        "required": int(f.required),
        "multiple": int(f.multi_value),
        "shared": int(f.shared),
        "owner": f.owner,
        "sources": list(f.sources),
        "input_type": f.input_type,
        "input": f.input_definition,
    }


def _subobject(s: GeneratedSubobject) -> dict:
    return {
        "name": s.name,
        "title": subobject_title(s.name),
        "parameter": s.parameter,
        "required": int(s.required),
        "shared": int(s.shared),
        "owner": s.owner,
        "sources": list(s.sources),
        "fields": [_field(f) for f in s.fields],
    }
