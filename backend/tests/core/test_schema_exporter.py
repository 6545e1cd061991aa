"""Schema Exporter — tests for snapshot → schema document conversion.

Tests cover:
    - Raw export keeps declarations, parents, labels and registry entries
    - Exported documents rebuild the same snapshot through build_store()
    - include_inherited expands categories to their effective schema
    - Category subsets carry only the properties they use
    - Statistics count categories, properties and subobjects
"""

import pytest

from structuresync.core.domain_types import Datatype
from structuresync.core.errors import CyclicInheritanceError
from structuresync.core.schema_document import build_store
from structuresync.core.schema_exporter import (
    export_categories, export_document, property_entry, schema_statistics,
)
from structuresync.core.schema_models import (
    CategorySchema, PropertyDefinition as P, SubobjectDefinition as S,
)
from structuresync.core.schema_store import InMemorySchemaStore


def _store() -> InMemorySchemaStore:
    address = S("Address", properties=(P("Has street", Datatype.TEXT, required=True),))
    return InMemorySchemaStore([
        CategorySchema(
            "Person",
            properties=(P("Has name", Datatype.TEXT, required=True), P("Has email", Datatype.EMAIL)),
            subobjects=(address.with_required(True),),
            label="Human",
        ),
        CategorySchema(
            "Employee",
            parent="Person",
            properties=(P("Has tag", multi_value=True),),
            description="Works here",
        ),
    ])


def test_raw_export_shape():
    document = export_document(_store())
    assert list(document["categories"]) == ["Employee", "Person"]
    assert document["categories"]["Person"] == {
        "label": "Human",
        "properties": {"required": ["Has name"], "optional": ["Has email"]},
        "subobjects": {"required": ["Address"], "optional": []},
    }
    assert document["categories"]["Employee"] == {
        "parent": "Person",
        "description": "Works here",
        "properties": {"required": [], "optional": ["Has tag"]},
    }
    assert document["properties"]["Has tag"] == {
        "datatype": "Page", "allowsMultipleValues": True,
    }
    assert document["subobjects"] == {
        "Address": {"properties": {"required": ["Has street"], "optional": []}},
    }


def test_export_rebuilds_same_snapshot():
    store = _store()
    rebuilt = build_store(export_document(store))
    for name in store.category_names():
        assert rebuilt.get_schema(name) == store.get_schema(name)


def test_registry_entries_win_and_unused_are_kept():
    registry = {
        "Has name": {"datatype": "Text", "label": "Name"},
        "Has fax": {"datatype": "Telephone number"},
    }
    document = export_document(_store(), registry)
    assert document["properties"]["Has name"] == {"datatype": "Text", "label": "Name"}
    assert document["properties"]["Has fax"] == {"datatype": "Telephone number"}
    assert document["properties"]["Has email"] == {"datatype": "Email"}


def test_include_inherited_expands_children():
    document = export_document(_store(), include_inherited=True)
    employee = document["categories"]["Employee"]
    assert employee["parent"] == "Person"
    assert employee["properties"]["required"] == ["Has name"]
    assert sorted(employee["properties"]["optional"]) == ["Has email", "Has tag"]
    assert employee["subobjects"] == {"required": ["Address"], "optional": []}


def test_include_inherited_propagates_cycles():
    store = InMemorySchemaStore([
        CategorySchema("A", parent="B"), CategorySchema("B", parent="A"),
    ])
    with pytest.raises(CyclicInheritanceError):
        export_document(store, include_inherited=True)


def test_subset_carries_used_properties_only():
    registry = {"Has fax": {"datatype": "Telephone number"}}
    document = export_categories(_store(), ["Person", "Ghost", "Person"], registry)
    assert list(document["categories"]) == ["Person"]
    assert sorted(document["properties"]) == ["Has email", "Has name", "Has street"]


def test_statistics():
    assert schema_statistics(_store(), {"Has fax": {"datatype": "Text"}}) == {
        "categoryCount": 2,
        "propertyCount": 5,
        "subobjectCount": 1,
        "categoriesWithParents": 1,
        "categoriesWithProperties": 2,
        "categoriesWithSubobjects": 1,
    }


def test_property_entry_omits_empty_optionals():
    assert property_entry(P("Has name", Datatype.TEXT)) == {"datatype": "Text"}
    assert property_entry(P("Has name", Datatype.TEXT), label="Name", description="") == {
        "datatype": "Text", "label": "Name",
    }
