"""Schema Document — tests for building a schema store from a document.

Tests cover:
    - {required, optional} and ordered-entry declaration shapes
    - Registry datatypes and multi-value flags; Page fallback for unknown names
    - parent / parents handling and "Category:" prefix stripping
    - Subobjects resolved from the subobject registry with per-category required flag
"""

from structuresync.core.domain_types import Datatype
from structuresync.core.schema_document import (
    build_store, category_parent, declared_parents, iter_declarations,
)


def _document() -> dict:
    return {
        "schemaVersion": "1.0",
        "properties": {
            "Has name": {"datatype": "Text"},
            "Has skill": {"datatype": "Page", "allowsMultipleValues": True},
            "Has street": {"datatype": "Text"},
        },
        "subobjects": {
            "Address": {"properties": {"required": ["Has street"]}},
        },
        "categories": {
            "Person": {
                "properties": {"required": ["Has name"], "optional": ["Has skill"]},
                "subobjects": {"optional": ["Address"]},
            },
            "Category:Employee": {
                "parents": ["Category:Person"],
                "properties": [
                    {"name": "Has badge", "required": True},
                    "Has skill",
                ],
                "subobjects": [{"name": "Address", "required": True}],
            },
        },
    }


# ─── Declarations ────────────────────────────────────────────────

def test_iter_declarations_mapping_shape_lists_required_first():
    declared = {"optional": ["b"], "required": ["a"]}
    assert list(iter_declarations(declared)) == [("a", True), ("b", False)]


def test_iter_declarations_entry_shape_keeps_order():
    declared = ["x", {"name": "y", "required": True}]
    assert list(iter_declarations(declared)) == [("x", False), ("y", True)]


def test_iter_declarations_empty():
    assert list(iter_declarations(None)) == []


# ─── Parents ─────────────────────────────────────────────────────

def test_category_parent_variants():
    assert category_parent({"parent": "Category:Agent"}) == "Agent"
    assert category_parent({"parents": ["A"]}) == "A"
    assert category_parent({"parents": []}) is None
    assert category_parent({}) is None


def test_declared_parents_merges_both_keys():
    assert declared_parents({"parent": "A", "parents": ["B", "A"]}) == ["A", "B"]


# ─── build_store ─────────────────────────────────────────────────

def test_build_store_strips_prefixes():
    store = build_store(_document())
    assert store.category_names() == ["Employee", "Person"]
    assert store.get_schema("Employee").parent == "Person"


def test_registry_datatypes_applied():
    person = build_store(_document()).get_schema("Person")
    name, skill = person.properties
    assert (name.datatype, name.required) == (Datatype.TEXT, True)
    assert (skill.datatype, skill.multi_value, skill.required) == (Datatype.PAGE, True, False)


def test_unknown_property_falls_back_to_page():
    employee = build_store(_document()).get_schema("Employee")
    badge = employee.properties[0]
    assert badge.name == "Has badge"
    assert badge.datatype is Datatype.PAGE
    assert badge.required is True


def test_subobject_required_flag_is_per_category():
    store = build_store(_document())
    person_address = store.get_schema("Person").subobjects[0]
    employee_address = store.get_schema("Employee").subobjects[0]
    assert person_address.required is False
    assert employee_address.required is True
    assert [p.name for p in employee_address.properties] == ["Has street"]
    assert employee_address.properties[0].required is True


def test_empty_document_builds_empty_store():
    assert len(build_store({})) == 0
