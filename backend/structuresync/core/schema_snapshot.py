"""Schema Snapshot — deterministic, JSON-safe dicts of resolved schemas.

Invariants:
    - Snapshots contain no Enums, sets or tuples (plain JSON types only)
    - Map-valued fields are emitted with sorted keys; list order is the pipeline order
    - Resolving the same store twice yields equal snapshots and equal digests
    - Booleans stay booleans here (the 1/0 encoding belongs to the wire format)

Design Decisions:
    - Separate from wire_format.py: snapshots are for comparison and hashing,
      the wire format is for API clients (ADR: ExMA ~7 methods per class)
"""

import hashlib
import json

from structuresync.core.schema_models import (
    ComposedSchema, EffectiveSchema, PromotionWarning,
    PropertyDefinition, SubobjectDefinition,
)


def _property(p: PropertyDefinition) -> dict:
    return {
        "name": p.name,
        "datatype": p.datatype.value,
        "required": p.required,
        "multi_value": p.multi_value,
    }


def _subobject(s: SubobjectDefinition) -> dict:
    return {
        "name": s.name,
        "required": s.required,
        "properties": [_property(p) for p in s.properties],
    }


def _warning(w: PromotionWarning) -> dict:
    return {
        "kind": w.kind.value,
        "name": w.name,
        "category": w.category,
        "required_in": list(w.required_in),
        "optional_in": list(w.optional_in),
    }


def _sorted_map(mapping: dict) -> dict:
    return {key: (list(value) if isinstance(value, tuple) else value)
            for key, value in sorted(mapping.items())}


def effective_schema_to_dict(effective: EffectiveSchema) -> dict:
    return {
        "category": effective.category,
        "parent": effective.parent,
        "ancestry": list(effective.ancestry),
        "properties": [_property(p) for p in effective.properties],
        "subobjects": [_subobject(s) for s in effective.subobjects],
        "property_origins": _sorted_map(effective.property_origins),
        "subobject_origins": _sorted_map(effective.subobject_origins),
        "warnings": [_warning(w) for w in effective.warnings],
    }


def composed_schema_to_dict(composed: ComposedSchema) -> dict:
    return {
        "sections": [
            {
                "category": s.category,
                "properties": [_property(p) for p in s.properties],
                "subobjects": [_subobject(so) for so in s.subobjects],
            }
            for s in composed.sections
        ],
        "property_sources": _sorted_map(composed.property_sources),
        "subobject_sources": _sorted_map(composed.subobject_sources),
        "property_contributors": _sorted_map(composed.property_contributors),
        "subobject_contributors": _sorted_map(composed.subobject_contributors),
        "warnings": [_warning(w) for w in composed.warnings],
    }


def snapshot_digest(snapshot: dict) -> str:
    """Stable sha1 over the canonical JSON encoding of a snapshot."""
    canonical = json.dumps(snapshot, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha1(canonical.encode("utf-8")).hexdigest()
