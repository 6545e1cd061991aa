"""Schema Exporter — turns a schema snapshot back into an importable schema document.

Invariants:
    - Output has the same shape schema_document.build_store() reads, so export → import
      reproduces the snapshot
    - Category, property and subobject maps are emitted with sorted keys (diff-friendly)
    - Raw export by default; include_inherited=True expands every category to its
      effective schema (inheritance errors propagate, no partial document)
    - Properties come from the supplied registry entries when present; names only known
      from declarations are derived from their datatype and multi-value flag
    - Pure: no IO, the snapshot is never mutated

Design Decisions:
    - Registry entries are passed already in document shape: the store snapshot keeps
      only what resolution needs, labels and descriptions live with the caller
"""

from typing import Any, Iterable, Mapping

from structuresync.core.inheritance_resolver import InheritanceResolver
from structuresync.core.repository_protocols import SchemaStore
from structuresync.core.schema_models import (
    CategorySchema, PropertyDefinition, SubobjectDefinition,
)

SCHEMA_VERSION = "1.0"


def export_document(
    store: SchemaStore,
    properties: Mapping[str, Mapping[str, Any]] | None = None,
    include_inherited: bool = False,
) -> dict:
    """Whole-store document; `properties` entries are exported even when unused."""
    schemas = _schemas(store, store.category_names(), include_inherited)
    return _document(schemas, properties or {}, keep_unused=True)


def export_categories(
    store: SchemaStore,
    category_names: Iterable[str],
    properties: Mapping[str, Mapping[str, Any]] | None = None,
    include_inherited: bool = False,
) -> dict:
    """Document restricted to the named categories and the properties they use.

    Names without a stored schema are skipped.
    """
    names = [n for n in dict.fromkeys(category_names) if store.get_schema(n) is not None]
    schemas = _schemas(store, names, include_inherited)
    return _document(schemas, properties or {}, keep_unused=False)


def schema_statistics(
    store: SchemaStore, properties: Mapping[str, Mapping[str, Any]] | None = None,
) -> dict[str, int]:
    schemas = [store.get_schema(n) for n in store.category_names()]
    declared = {p.name for s in schemas for p in _all_properties(s)}
    return {
        "categoryCount": len(schemas),
        "propertyCount": len(declared | set(properties or {})),
        "subobjectCount": len({sub.name for s in schemas for sub in s.subobjects}),
        "categoriesWithParents": sum(1 for s in schemas if s.parent),
        "categoriesWithProperties": sum(1 for s in schemas if s.properties),
        "categoriesWithSubobjects": sum(1 for s in schemas if s.subobjects),
    }


def property_entry(
    definition: PropertyDefinition, label: str | None = None, description: str | None = None,
) -> dict:
    """Document entry for one property; optional keys only when set."""
    entry: dict[str, Any] = {"datatype": definition.datatype.value}
    if definition.multi_value:
        entry["allowsMultipleValues"] = True
    if label:
        entry["label"] = label
    if description:
        entry["description"] = description
    return entry


# --- Helpers -------------------------------------------------------------------

def _schemas(
    store: SchemaStore, names: Iterable[str], include_inherited: bool,
) -> list[CategorySchema]:
    if not include_inherited:
        return [store.get_schema(n) for n in names]
    resolver = InheritanceResolver(store)
    schemas = []
    for name in names:
        raw = store.get_schema(name)
        effective = resolver.resolve(name)
        schemas.append(CategorySchema(
            name=name,
            properties=effective.properties,
            subobjects=effective.subobjects,
            parent=raw.parent,
            label=raw.label,
            description=raw.description,
        ))
    return schemas


def _document(
    schemas: list[CategorySchema],
    registry: Mapping[str, Mapping[str, Any]],
    keep_unused: bool,
) -> dict:
    categories = {s.name: _category_entry(s) for s in schemas}

    subobjects: dict[str, SubobjectDefinition] = {}
    for schema in schemas:
        for subobject in schema.subobjects:
            subobjects.setdefault(subobject.name, subobject)

    used: dict[str, PropertyDefinition] = {}
    for schema in schemas:
        for prop in _all_properties(schema):
            used.setdefault(prop.name, prop)

    names = set(used) | (set(registry) if keep_unused else set())
    properties = {
        name: dict(registry[name]) if name in registry else property_entry(used[name])
        for name in sorted(names)
    }

    document = {
        "schemaVersion": SCHEMA_VERSION,
        "categories": dict(sorted(categories.items())),
        "properties": properties,
    }
    if subobjects:
        document["subobjects"] = {
            name: {"properties": _declarations(subobjects[name].properties)}
            for name in sorted(subobjects)
        }
    return document


def _category_entry(schema: CategorySchema) -> dict:
    entry: dict[str, Any] = {}
    if schema.parent:
        entry["parent"] = schema.parent
    if schema.label:
        entry["label"] = schema.label
    if schema.description:
        entry["description"] = schema.description
    entry["properties"] = _declarations(schema.properties)
    if schema.subobjects:
        entry["subobjects"] = _declarations(schema.subobjects)
    return entry


def _declarations(items) -> dict[str, list[str]]:
    return {
        "required": [i.name for i in items if i.required],
        "optional": [i.name for i in items if not i.required],
    }


def _all_properties(schema: CategorySchema) -> list[PropertyDefinition]:
    nested = [p for sub in schema.subobjects for p in sub.properties]
    return list(schema.properties) + nested
