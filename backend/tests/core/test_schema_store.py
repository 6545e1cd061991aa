"""In-Memory Schema Store — lookup, naming and size of a schema snapshot."""

from structuresync.core.repository_protocols import SchemaStore
from structuresync.core.schema_models import CategorySchema
from structuresync.core.schema_store import InMemorySchemaStore


def test_lookup_and_miss():
    store = InMemorySchemaStore([CategorySchema("Person"), CategorySchema("Agent")])
    assert store.get_schema("Person").name == "Person"
    assert store.get_schema("Ghost") is None


def test_names_sorted_and_membership():
    store = InMemorySchemaStore([CategorySchema("Person"), CategorySchema("Agent")])
    assert store.category_names() == ["Agent", "Person"]
    assert "Agent" in store
    assert "Ghost" not in store
    assert len(store) == 2


def test_satisfies_protocol():
    store: SchemaStore = InMemorySchemaStore()
    assert store.category_names() == []
