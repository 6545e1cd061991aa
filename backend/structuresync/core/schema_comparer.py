"""Schema Comparer — field-level diff between two schema documents.

Invariants:
    - compare_schemas(new, old): "added" = only in new, "removed" = only in old
    - Every name lands in exactly one of added / removed / modified / unchanged
    - Declaration lists compare as sets: reordering required/optional is not a change
    - Category keys and parents compare without their "Category:" prefix
    - Datatype labels compare case-insensitively when they name a known datatype
    - Output lists are sorted by name (stable across runs)
    - Pure: neither document is mutated

Design Decisions:
    - Each side is normalized into flat comparable records first, then diffed field by
      field; a "changes" entry carries {old, new} so clients can render either side
"""

from typing import Any, Mapping

from structuresync.core.domain_types import Datatype
from structuresync.core.schema_document import category_parent, iter_declarations
from structuresync.core.naming import strip_category_prefix

SECTIONS = ("categories", "properties", "subobjects")


def compare_schemas(new: Mapping[str, Any], old: Mapping[str, Any]) -> dict:
    """Diff per section: {added, removed, modified: [{name, changes}], unchanged}."""
    return {
        "categories": _diff(_categories(new), _categories(old)),
        "properties": _diff(_properties(new), _properties(old)),
        "subobjects": _diff(_subobjects(new), _subobjects(old)),
    }


def has_changes(diff: Mapping[str, Any]) -> bool:
    return any(
        diff[section]["added"] or diff[section]["removed"] or diff[section]["modified"]
        for section in SECTIONS
    )


def diff_summary(diff: Mapping[str, Any]) -> str:
    """Human-readable counts per section."""
    blocks = []
    for section in SECTIONS:
        counts = diff[section]
        blocks.append("\n".join([
            f"{section.capitalize()}:",
            f"  Added: {len(counts['added'])}",
            f"  Removed: {len(counts['removed'])}",
            f"  Modified: {len(counts['modified'])}",
            f"  Unchanged: {len(counts['unchanged'])}",
        ]))
    return "\n\n".join(blocks)


# --- Normalization -------------------------------------------------------------

def _categories(document: Mapping[str, Any]) -> dict[str, dict]:
    records = {}
    for name, data in (document.get("categories") or {}).items():
        data = data or {}
        records[strip_category_prefix(str(name))] = {
            "parent": category_parent(data),
            "label": data.get("label") or "",
            "description": data.get("description") or "",
            **_split(data.get("properties"), "required", "optional"),
            **_split(data.get("subobjects"), "requiredSubobjects", "optionalSubobjects"),
        }
    return records


def _properties(document: Mapping[str, Any]) -> dict[str, dict]:
    records = {}
    for name, data in (document.get("properties") or {}).items():
        data = data or {}
        records[name] = {
            "datatype": _datatype(data.get("datatype")),
            "allowsMultipleValues": bool(data.get("allowsMultipleValues", False)),
            "label": data.get("label") or "",
            "description": data.get("description") or "",
        }
    return records


def _subobjects(document: Mapping[str, Any]) -> dict[str, dict]:
    return {
        name: _split((data or {}).get("properties"), "required", "optional")
        for name, data in (document.get("subobjects") or {}).items()
    }


def _split(declared: Any, required_key: str, optional_key: str) -> dict[str, list[str]]:
    pairs = list(iter_declarations(declared))
    return {
        required_key: sorted({name for name, required in pairs if required}),
        optional_key: sorted({name for name, required in pairs if not required}),
    }


def _datatype(value: Any) -> str:
    label = str(value) if value else ""
    if Datatype.is_known(label):
        return Datatype.parse(label).value
    return label


# --- Diff ----------------------------------------------------------------------

def _diff(new: dict[str, dict], old: dict[str, dict]) -> dict:
    added = sorted(set(new) - set(old))
    removed = sorted(set(old) - set(new))
    modified = []
    unchanged = []
    for name in sorted(set(new) & set(old)):
        changes = {
            field: {"old": old[name][field], "new": new[name][field]}
            for field in new[name]
            if new[name][field] != old[name][field]
        }
        if changes:
            modified.append({"name": name, "changes": changes})
        else:
            unchanged.append(name)
    return {"added": added, "removed": removed, "modified": modified, "unchanged": unchanged}
