"""Schema Snapshot — tests for deterministic, JSON-safe snapshots."""

import json

from structuresync.core.domain_types import Datatype
from structuresync.core.inheritance_resolver import InheritanceResolver
from structuresync.core.multi_category_resolver import MultiCategoryResolver
from structuresync.core.schema_models import CategorySchema, PropertyDefinition as P
from structuresync.core.schema_snapshot import (
    composed_schema_to_dict, effective_schema_to_dict, snapshot_digest,
)
from structuresync.core.schema_store import InMemorySchemaStore


def _store() -> InMemorySchemaStore:
    return InMemorySchemaStore([
        CategorySchema("Book", properties=(
            P("title", Datatype.TEXT, required=True), P("author"),
        )),
        CategorySchema("Novel", parent="Book", properties=(
            P("author", required=True), P("genre", Datatype.TEXT),
        )),
    ])


def test_resolving_twice_gives_identical_snapshots():
    first = composed_schema_to_dict(
        MultiCategoryResolver(InheritanceResolver(_store())).resolve(["Novel", "Book"]),
    )
    second = composed_schema_to_dict(
        MultiCategoryResolver(InheritanceResolver(_store())).resolve(["Novel", "Book"]),
    )
    assert json.dumps(first) == json.dumps(second)
    assert snapshot_digest(first) == snapshot_digest(second)


def test_effective_snapshot_is_json_safe():
    snapshot = effective_schema_to_dict(InheritanceResolver(_store()).resolve("Novel"))
    decoded = json.loads(json.dumps(snapshot))
    assert decoded == snapshot
    assert snapshot["properties"][1] == {
        "name": "author", "datatype": "Page", "required": True, "multi_value": False,
    }
    assert snapshot["warnings"][0]["name"] == "author"


def test_maps_are_sorted():
    snapshot = effective_schema_to_dict(InheritanceResolver(_store()).resolve("Novel"))
    assert list(snapshot["property_origins"]) == ["author", "genre", "title"]


def test_digest_changes_with_content():
    a = composed_schema_to_dict(
        MultiCategoryResolver(InheritanceResolver(_store())).resolve(["Book"]),
    )
    b = composed_schema_to_dict(
        MultiCategoryResolver(InheritanceResolver(_store())).resolve(["Novel"]),
    )
    assert snapshot_digest(a) != snapshot_digest(b)
