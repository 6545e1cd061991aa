"""Schema Document — converts a schema document (parsed JSON/YAML) into core schema values.

Document shape:
    {
      "schemaVersion": "1.0",
      "properties": {"Has name": {"datatype": "Text", "allowsMultipleValues": false}},
      "subobjects": {"Address": {"properties": {"required": [...], "optional": [...]}}},
      "categories": {
        "Person": {
          "parent": "Agent",                         # or "parents": ["Agent"]
          "properties": {"required": [...], "optional": [...]},
          "subobjects": {"required": [...], "optional": [...]}
        }
      }
    }

Invariants:
    - Declaration lists accept either {required: [...], optional: [...]} (required first)
      or ordered entries (a bare name = optional, {"name", "required"} mapping)
    - A property missing from the registry resolves to datatype Page, single-valued
    - "Category:" prefixes on category and parent names are stripped
    - Pure: the document is never mutated

Design Decisions:
    - Builds an InMemorySchemaStore directly: the same snapshot type the database shell
      produces, so import preview and stored schema resolve identically
"""

from typing import Any, Iterator, Mapping

from structuresync.core.domain_types import Datatype
from structuresync.core.naming import strip_category_prefix
from structuresync.core.schema_models import (
    CategorySchema, PropertyDefinition, SubobjectDefinition,
)
from structuresync.core.schema_store import InMemorySchemaStore


def build_store(document: Mapping[str, Any]) -> InMemorySchemaStore:
    """Snapshot store holding every category of the document."""
    registry = property_registry(document)
    subobjects = subobject_registry(document, registry)
    categories = document.get("categories") or {}
    return InMemorySchemaStore(
        build_category(name, data or {}, registry, subobjects)
        for name, data in categories.items()
    )


def property_registry(document: Mapping[str, Any]) -> dict[str, PropertyDefinition]:
    """Property name → optional, single-declaration template carrying its datatype."""
    registry = {}
    for name, data in (document.get("properties") or {}).items():
        data = data or {}
        registry[name] = PropertyDefinition(
            name=name,
            datatype=Datatype.parse(data.get("datatype")),
            multi_value=bool(data.get("allowsMultipleValues", False)),
        )
    return registry


def subobject_registry(
    document: Mapping[str, Any], registry: Mapping[str, PropertyDefinition],
) -> dict[str, SubobjectDefinition]:
    subobjects = {}
    for name, data in (document.get("subobjects") or {}).items():
        declared = (data or {}).get("properties")
        subobjects[name] = SubobjectDefinition(
            name=name,
            properties=tuple(
                lookup_property(prop_name, required, registry)
                for prop_name, required in iter_declarations(declared)
            ),
        )
    return subobjects


def build_category(
    name: str,
    data: Mapping[str, Any],
    registry: Mapping[str, PropertyDefinition],
    subobjects: Mapping[str, SubobjectDefinition],
) -> CategorySchema:
    return CategorySchema(
        name=strip_category_prefix(name),
        properties=tuple(
            lookup_property(prop_name, required, registry)
            for prop_name, required in iter_declarations(data.get("properties"))
        ),
        subobjects=tuple(
            subobjects.get(sub_name, SubobjectDefinition(name=sub_name)).with_required(required)
            for sub_name, required in iter_declarations(data.get("subobjects"))
        ),
        parent=category_parent(data),
        label=data.get("label") or "",
        description=data.get("description") or "",
    )


def lookup_property(
    name: str, required: bool, registry: Mapping[str, PropertyDefinition],
) -> PropertyDefinition:
    """Registry entry with the given required flag; unknown names become Page."""
    template = registry.get(name)
    if template is None:
        return PropertyDefinition(name=name, datatype=Datatype.PAGE, required=required)
    return template.with_required(required)


def category_parent(data: Mapping[str, Any]) -> str | None:
    """The single declared parent, from `parent` or the first of `parents`."""
    parent = data.get("parent")
    if not parent:
        parents = data.get("parents") or []
        parent = parents[0] if parents else None
    if not parent:
        return None
    return strip_category_prefix(str(parent)) or None


def declared_parents(data: Mapping[str, Any]) -> list[str]:
    """Every parent a category names, for validation."""
    parents = list(data.get("parents") or [])
    if data.get("parent"):
        parents.insert(0, data["parent"])
    return list(dict.fromkeys(strip_category_prefix(str(p)) for p in parents))


def iter_declarations(declared: Any) -> Iterator[tuple[str, bool]]:
    """(name, required) pairs from either declaration list shape."""
    if not declared:
        return
    if isinstance(declared, Mapping):
        for name in declared.get("required") or []:
            yield str(name), True
        for name in declared.get("optional") or []:
            yield str(name), False
        return
    for entry in declared:
        if isinstance(entry, Mapping):
            yield str(entry["name"]), bool(entry.get("required", False))
        else:
            yield str(entry), False
