"""Multi-Category Resolver — tests for composition with first-owner-wins dedup.

Tests cover:
    - Person/Employee: shared name appears once, owned by the first category
    - Later required declarations promote the owner's copy (with warning)
    - Contributors track every declaring category; shared ⇔ 2+ contributors
    - Empty selection, unknown categories and cycles abort the whole request
    - Duplicate selection entries collapse; input order defines section order
"""

import pytest

from structuresync.core.domain_types import Datatype, PROMOTION_WORDING
from structuresync.core.errors import (
    CyclicInheritanceError, EmptySelectionError, UnknownCategoryError,
)
from structuresync.core.inheritance_resolver import InheritanceResolver
from structuresync.core.multi_category_resolver import MultiCategoryResolver
from structuresync.core.schema_models import (
    CategorySchema, PropertyDefinition as P, SubobjectDefinition as S,
)
from structuresync.core.schema_store import InMemorySchemaStore


def _resolver(*schemas: CategorySchema) -> MultiCategoryResolver:
    return MultiCategoryResolver(InheritanceResolver(InMemorySchemaStore(schemas)))


def _people() -> MultiCategoryResolver:
    return _resolver(
        CategorySchema(
            "Person",
            properties=(
                P("Has name", Datatype.TEXT, required=True),
                P("Has email", Datatype.EMAIL),
            ),
            subobjects=(S("Address", properties=(P("Has street"),)),),
        ),
        CategorySchema(
            "Employee",
            properties=(
                P("Has name", Datatype.TEXT, required=True),
                P("Has employee ID", Datatype.TEXT, required=True),
                P("Has email", Datatype.EMAIL, required=True),
            ),
            subobjects=(S("Address", required=True), S("Badge")),
        ),
    )


# ─── Ownership ───────────────────────────────────────────────────

def test_shared_property_appears_once_owned_by_first():
    composed = _people().resolve(["Person", "Employee"])
    names = [p.name for p in composed.all_properties()]
    assert names.count("Has name") == 1
    assert composed.property_sources["Has name"] == "Person"
    person, employee = composed.sections
    assert [p.name for p in person.properties] == ["Has name", "Has email"]
    assert [p.name for p in employee.properties] == ["Has employee ID"]


def test_owner_follows_input_order():
    composed = _people().resolve(["Employee", "Person"])
    assert composed.property_sources["Has name"] == "Employee"
    assert composed.category_names == ["Employee", "Person"]
    assert composed.sections[1].properties == ()


def test_every_name_in_exactly_one_section():
    composed = _people().resolve(["Person", "Employee"])
    names = [p.name for p in composed.all_properties()]
    assert len(names) == len(set(names))
    assert set(names) == set(composed.property_sources)


# ─── Promotion ───────────────────────────────────────────────────

def test_later_required_declaration_promotes_owner_copy():
    composed = _people().resolve(["Person", "Employee"])
    email = next(p for p in composed.all_properties() if p.name == "Has email")
    assert email.required is True
    assert composed.property_sources["Has email"] == "Person"
    warning = next(w for w in composed.warnings if w.name == "Has email")
    assert PROMOTION_WORDING in warning.message
    assert warning.required_in == ("Employee",)
    assert warning.optional_in == ("Person",)


def test_subobject_promotion_keeps_owner_copy():
    composed = _people().resolve(["Person", "Employee"])
    address = next(s for s in composed.all_subobjects() if s.name == "Address")
    assert address.required is True
    assert [p.name for p in address.properties] == ["Has street"]
    assert composed.subobject_sources == {"Address": "Person", "Badge": "Employee"}


def test_later_subobject_declaration_merges_nested_properties():
    resolver = _resolver(
        CategorySchema("Person", subobjects=(
            S("Address", properties=(P("Has street"),)),
        )),
        CategorySchema("Employee", subobjects=(
            S("Address", properties=(P("Has street", required=True), P("Has zip"))),
        )),
    )
    composed = resolver.resolve(["Person", "Employee"])
    address = composed.sections[0].subobjects[0]
    assert [(p.name, p.required) for p in address.properties] == [
        ("Has street", True), ("Has zip", False),
    ]
    assert composed.sections[1].subobjects == ()
    warning = next(w for w in composed.warnings if w.name == "Address/Has street")
    assert warning.category == "Person"
    assert warning.required_in == ("Employee",)
    assert warning.optional_in == ("Person",)


def test_matching_nested_declarations_raise_no_warning():
    composed = _people().resolve(["Person", "Employee"])
    assert not any("/" in w.name for w in composed.warnings)


def test_inherited_warnings_are_carried():
    resolver = _resolver(
        CategorySchema("Book", properties=(P("author"),)),
        CategorySchema("Novel", parent="Book", properties=(P("author", required=True),)),
    )
    composed = resolver.resolve(["Novel"])
    assert [w.name for w in composed.warnings] == ["author"]


# ─── Attribution ─────────────────────────────────────────────────

def test_contributors_and_shared_flags():
    composed = _people().resolve(["Person", "Employee"])
    assert composed.property_contributors["Has name"] == ("Person", "Employee")
    assert composed.property_contributors["Has employee ID"] == ("Employee",)
    assert composed.is_shared_property("Has name") is True
    assert composed.is_shared_property("Has employee ID") is False
    assert composed.is_shared_subobject("Address") is True
    assert composed.is_shared_subobject("Badge") is False


def test_single_category_has_no_shared_names():
    composed = _people().resolve(["Person"])
    assert not any(composed.is_shared_property(p.name) for p in composed.all_properties())


# ─── Selection handling ──────────────────────────────────────────

def test_empty_selection_raises():
    with pytest.raises(EmptySelectionError) as exc:
        _people().resolve([])
    assert exc.value.code == "EMPTY_SELECTION"


def test_unknown_category_aborts_whole_request():
    with pytest.raises(UnknownCategoryError) as exc:
        _people().resolve(["Person", "Ghost"])
    assert exc.value.category_name == "Ghost"
    assert exc.value.context.selection == ["Person", "Ghost"]


def test_single_unknown_category_raises():
    with pytest.raises(UnknownCategoryError):
        _people().resolve(["Ghost"])


def test_cycle_in_any_selected_category_aborts():
    resolver = _resolver(
        CategorySchema("Ok"),
        CategorySchema("A", parent="B"),
        CategorySchema("B", parent="A"),
    )
    with pytest.raises(CyclicInheritanceError):
        resolver.resolve(["Ok", "A"])


def test_duplicate_selection_collapses():
    composed = _people().resolve(["Person", "Employee", "Person"])
    assert composed.category_names == ["Person", "Employee"]
