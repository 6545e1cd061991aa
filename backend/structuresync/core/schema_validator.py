"""Schema Validator — structural and reference checks on a schema document.

Invariants:
    - Never raises on bad input: every problem becomes one message in the returned list
    - Empty list ⇔ the document can be imported
    - Missing/invalid `categories` stops validation early (nothing else is checkable)
    - Each inheritance cycle is reported once, however many categories reach it
    - Cycle detection runs only on an otherwise well-formed document
    - Parent references and category keys are compared without their "Category:" prefix
    - Warnings (schema_warnings) never block an import
"""

from typing import Any, Mapping

from structuresync.core.domain_types import Datatype
from structuresync.core.errors import CyclicInheritanceError, UnknownCategoryError
from structuresync.core.inheritance_resolver import InheritanceResolver
from structuresync.core.naming import strip_category_prefix
from structuresync.core.schema_document import build_store, declared_parents, iter_declarations


def validate_schema(document: Any) -> list[str]:
    """All errors found in the document (empty if valid)."""
    if not isinstance(document, Mapping):
        return ["Schema document must be a mapping"]

    errors = []
    if "schemaVersion" not in document:
        errors.append("Missing required field: schemaVersion")

    categories = document.get("categories")
    if not isinstance(categories, Mapping):
        errors.append("Missing or invalid field: categories (must be a mapping)")
        return errors

    properties = document.get("properties")
    if not isinstance(properties, Mapping):
        errors.append("Missing or invalid field: properties (must be a mapping)")
        properties = {}

    subobjects = document.get("subobjects", {})
    if not isinstance(subobjects, Mapping):
        errors.append("Invalid field: subobjects (must be a mapping)")
        subobjects = {}

    for name, data in properties.items():
        errors.extend(_validate_property(name, data))
    for name, data in subobjects.items():
        errors.extend(_validate_subobject(name, data, properties))
    category_names = {strip_category_prefix(str(name)) for name in categories}
    for name, data in categories.items():
        errors.extend(_validate_category(name, data, category_names, properties, subobjects))

    if not errors:
        errors.extend(find_cycles(document))
    return errors


def find_cycles(document: Mapping[str, Any]) -> list[str]:
    """One message per distinct inheritance cycle."""
    store = build_store(document)
    resolver = InheritanceResolver(store)
    seen: set[frozenset[str]] = set()
    messages = []
    for name in store.category_names():
        try:
            resolver.ancestors(name)
        except CyclicInheritanceError as e:
            cycle = e.chain[e.chain.index(e.chain[-1]):]
            key = frozenset(cycle)
            if key not in seen:
                seen.add(key)
                messages.append(f"Circular inheritance detected: {' -> '.join(cycle)}")
        except UnknownCategoryError:
            continue
    return messages


def schema_warnings(document: Mapping[str, Any]) -> list[str]:
    """Non-fatal observations: empty categories and unused properties."""
    categories = document.get("categories") or {}
    properties = document.get("properties") or {}
    subobjects = document.get("subobjects") or {}

    warnings = []
    used = set()
    for name, data in categories.items():
        declared = [p for p, _ in iter_declarations((data or {}).get("properties"))]
        if not declared and not (data or {}).get("subobjects"):
            warnings.append(f"Category '{name}': no properties defined")
        used.update(declared)
    for data in subobjects.values():
        used.update(p for p, _ in iter_declarations((data or {}).get("properties")))
    for name in properties:
        if name not in used:
            warnings.append(f"Property '{name}': not used by any category")
    return warnings


# --- Per-entry checks ----------------------------------------------------------

def _validate_property(name: str, data: Any) -> list[str]:
    if not isinstance(data, Mapping):
        return [f"Property '{name}': definition must be a mapping"]
    datatype = data.get("datatype")
    if not datatype:
        return [f"Property '{name}': missing datatype"]
    if not Datatype.is_known(str(datatype)):
        return [f"Property '{name}': unknown datatype '{datatype}'"]
    return []


def _validate_subobject(name: str, data: Any, properties: Mapping) -> list[str]:
    if not isinstance(data, Mapping):
        return [f"Subobject '{name}': definition must be a mapping"]
    errors = _declaration_shape_errors(f"Subobject '{name}'", "properties", data.get("properties"))
    if errors:
        return errors
    return [
        f"Subobject '{name}': property '{prop}' does not exist"
        for prop, _ in iter_declarations(data.get("properties"))
        if prop not in properties
    ]


def _validate_category(
    name: str, data: Any, category_names: set[str], properties: Mapping, subobjects: Mapping,
) -> list[str]:
    label = f"Category '{name}'"
    if data is None:
        return []
    if not isinstance(data, Mapping):
        return [f"{label}: definition must be a mapping"]

    errors = []
    if "parents" in data and not isinstance(data["parents"], list):
        errors.append(f"{label}: parents must be a list")
        return errors

    parents = declared_parents(data)
    if len(parents) > 1:
        errors.append(f"{label}: multiple parents {parents} (single inheritance only)")
    for parent in parents:
        if parent not in category_names:
            errors.append(f"{label}: parent category '{parent}' does not exist")

    for key, registry, noun in (
        ("properties", properties, "property"),
        ("subobjects", subobjects, "subobject"),
    ):
        shape_errors = _declaration_shape_errors(label, key, data.get(key))
        if shape_errors:
            errors.extend(shape_errors)
            continue
        seen: dict[str, bool] = {}
        for item, required in iter_declarations(data.get(key)):
            status = "required" if required else "optional"
            if item not in registry:
                errors.append(f"{label}: {status} {noun} '{item}' does not exist")
            if item in seen and seen[item] != required:
                errors.append(f"{label}: {noun} '{item}' listed as both required and optional")
            seen.setdefault(item, required)
    return errors


def _declaration_shape_errors(label: str, key: str, declared: Any) -> list[str]:
    if declared is None:
        return []
    if isinstance(declared, Mapping):
        return [
            f"{label}: {key}.{group} must be a list"
            for group in ("required", "optional")
            if group in declared and not isinstance(declared[group], list)
        ]
    if not isinstance(declared, list):
        return [f"{label}: {key} must be a mapping or a list"]
    errors = []
    for index, entry in enumerate(declared):
        if isinstance(entry, Mapping) and "name" not in entry:
            errors.append(f"{label}: {key}[{index}] missing 'name'")
        elif not isinstance(entry, (str, Mapping)):
            errors.append(f"{label}: {key}[{index}] must be a name or a mapping")
    return errors
