"""Inheritance Resolver — tests for single-parent chain merging.

Tests cover:
    - A root category resolves to exactly its own declarations
    - Book/Novel: ancestor order first, descendant promotion with warning
    - Datatype / multi-value override by descendants
    - Subobjects follow the same merge, nested property lists are unioned
    - Unknown categories, dangling parents and cycles raise
    - ancestors / is_ancestor_of / validate_inheritance helpers
"""

import pytest

from structuresync.core.domain_types import Datatype, DeclarationKind, PROMOTION_WORDING
from structuresync.core.errors import CyclicInheritanceError, UnknownCategoryError
from structuresync.core.inheritance_resolver import InheritanceResolver
from structuresync.core.schema_models import (
    CategorySchema, PropertyDefinition as P, SubobjectDefinition as S,
)
from structuresync.core.schema_store import InMemorySchemaStore


def _resolver(*schemas: CategorySchema) -> InheritanceResolver:
    return InheritanceResolver(InMemorySchemaStore(schemas))


def _library() -> InheritanceResolver:
    return _resolver(
        CategorySchema("Book", properties=(
            P("title", Datatype.TEXT, required=True),
            P("author", Datatype.PAGE, required=False),
        )),
        CategorySchema("Novel", parent="Book", properties=(
            P("author", Datatype.PAGE, required=True),
            P("genre", Datatype.TEXT, required=False),
        )),
    )


# ─── Root categories ─────────────────────────────────────────────

def test_root_category_resolves_to_own_declarations():
    effective = _library().resolve("Book")
    assert [(p.name, p.required) for p in effective.properties] == [
        ("title", True), ("author", False),
    ]
    assert effective.warnings == ()
    assert effective.ancestry == ("Book",)
    assert effective.parent is None


# ─── Book / Novel ────────────────────────────────────────────────

def test_novel_inherits_in_root_first_order():
    effective = _library().resolve("Novel")
    assert [p.name for p in effective.properties] == ["title", "author", "genre"]


def test_novel_promotes_author_with_warning():
    effective = _library().resolve("Novel")
    author = effective.get_property("author")
    assert author.required is True
    assert author.datatype is Datatype.PAGE
    assert effective.get_property("title").required is True
    assert effective.get_property("genre").required is False

    assert len(effective.warnings) == 1
    warning = effective.warnings[0]
    assert warning.name == "author"
    assert warning.kind is DeclarationKind.PROPERTY
    assert PROMOTION_WORDING in warning.message
    assert warning.required_in == ("Novel",)
    assert warning.optional_in == ("Book",)


def test_origins_record_first_declaring_level():
    effective = _library().resolve("Novel")
    assert effective.property_origins == {
        "title": "Book", "author": "Book", "genre": "Novel",
    }
    assert effective.ancestry == ("Book", "Novel")
    assert effective.parent == "Book"


def test_required_never_demoted_by_descendant():
    resolver = _resolver(
        CategorySchema("A", properties=(P("x", required=True),)),
        CategorySchema("B", parent="A", properties=(P("x", required=False),)),
    )
    effective = resolver.resolve("B")
    assert effective.get_property("x").required is True
    assert len(effective.warnings) == 1


def test_descendant_overrides_datatype_and_multi_value():
    resolver = _resolver(
        CategorySchema("A", properties=(P("x", Datatype.TEXT),)),
        CategorySchema("B", parent="A", properties=(P("x", Datatype.NUMBER, multi_value=True),)),
    )
    prop = resolver.resolve("B").get_property("x")
    assert prop.datatype is Datatype.NUMBER
    assert prop.multi_value is True


def test_three_level_chain():
    resolver = _resolver(
        CategorySchema("Work", properties=(P("created", Datatype.DATE),)),
        CategorySchema("Book", parent="Work", properties=(P("title", required=True),)),
        CategorySchema("Novel", parent="Book", properties=(P("genre"),)),
    )
    effective = resolver.resolve("Novel")
    assert [p.name for p in effective.properties] == ["created", "title", "genre"]
    assert effective.ancestry == ("Work", "Book", "Novel")


# ─── Subobjects ──────────────────────────────────────────────────

def test_subobjects_merge_like_properties():
    resolver = _resolver(
        CategorySchema("Person", subobjects=(
            S("Address", properties=(P("street", required=True),)),
        )),
        CategorySchema("Employee", parent="Person", subobjects=(
            S("Address", properties=(P("city"),), required=True),
            S("Badge"),
        )),
    )
    effective = resolver.resolve("Employee")
    assert [s.name for s in effective.subobjects] == ["Address", "Badge"]
    address = effective.get_subobject("Address")
    assert address.required is True
    assert [p.name for p in address.properties] == ["street", "city"]
    assert effective.subobject_origins["Address"] == "Person"
    assert any(w.kind is DeclarationKind.SUBOBJECT for w in effective.warnings)


def test_nested_property_promotion_is_reported():
    resolver = _resolver(
        CategorySchema("A", subobjects=(S("Contact", properties=(P("email"),)),)),
        CategorySchema("B", parent="A", subobjects=(
            S("Contact", properties=(P("email", required=True),)),
        )),
    )
    effective = resolver.resolve("B")
    contact = effective.get_subobject("Contact")
    assert contact.properties[0].required is True
    assert [w.name for w in effective.warnings] == ["Contact/email"]


# ─── Failures ────────────────────────────────────────────────────

def test_unknown_category_raises():
    with pytest.raises(UnknownCategoryError) as exc:
        _library().resolve("Ghost")
    assert exc.value.category_name == "Ghost"
    assert exc.value.http_status == 404


def test_missing_parent_raises_unknown_with_referrer():
    resolver = _resolver(CategorySchema("Orphan", parent="Missing"))
    with pytest.raises(UnknownCategoryError) as exc:
        resolver.resolve("Orphan")
    assert exc.value.category_name == "Missing"
    assert exc.value.referenced_by == "Orphan"


def test_cycle_raises():
    resolver = _resolver(
        CategorySchema("A", parent="B"),
        CategorySchema("B", parent="A"),
    )
    with pytest.raises(CyclicInheritanceError) as exc:
        resolver.resolve("A")
    assert exc.value.chain == ["A", "B", "A"]
    assert "A -> B -> A" in exc.value.message


def test_self_parent_is_a_cycle():
    resolver = _resolver(CategorySchema("Loop", parent="Loop"))
    with pytest.raises(CyclicInheritanceError):
        resolver.resolve("Loop")


# ─── Helpers ─────────────────────────────────────────────────────

def test_ancestors_root_first():
    assert _library().ancestors("Novel") == ["Book", "Novel"]


def test_is_ancestor_of():
    resolver = _library()
    assert resolver.is_ancestor_of("Book", "Novel") is True
    assert resolver.is_ancestor_of("Novel", "Book") is False
    assert resolver.is_ancestor_of("Novel", "Novel") is False


def test_validate_inheritance_collects_messages():
    resolver = _resolver(
        CategorySchema("Ok"),
        CategorySchema("Orphan", parent="Missing"),
        CategorySchema("X", parent="Y"),
        CategorySchema("Y", parent="X"),
    )
    errors = resolver.validate_inheritance()
    assert len(errors) == 3
    assert any(e.startswith("Orphan:") for e in errors)
    assert sum("Circular inheritance" in e for e in errors) == 2


def test_resolution_is_repeatable():
    resolver = _library()
    assert resolver.resolve("Novel") == resolver.resolve("Novel")
