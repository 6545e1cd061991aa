"""Multi-Category Routes — composed schema preview and composite generation."""

import pytest

from structuresync.config import Settings, get_settings
from structuresync.main import app


@pytest.fixture
def edit_token():
    app.dependency_overrides[get_settings] = lambda: Settings(edit_api_token="s3cret")
    yield "s3cret"
    app.dependency_overrides.pop(get_settings, None)


# ─── resolve ─────────────────────────────────────────────────────

async def test_resolve_person_employee(client, imported_schema):
    res = await client.post(
        "/api/v1/multi-category/resolve",
        json={"categories": ["Person", "Employee"]},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["categories"] == ["Person", "Employee"]
    props = {p["name"]: p for p in data["properties"]}
    assert props["Has name"]["shared"] == 1
    assert props["Has name"]["owner"] == "Person"
    assert props["Has name"]["sources"] == ["Person", "Employee"]
    assert props["Has email"]["required"] == 1
    assert props["Has employee ID"]["owner"] == "Employee"
    assert props["Has employee ID"]["shared"] == 0
    assert "Has email" in [w["name"] for w in data["warnings"]]


async def test_resolve_flags_are_ints(client, imported_schema):
    res = await client.post(
        "/api/v1/multi-category/resolve", json={"categories": ["Person", "Company"]},
    )
    for entry in res.json()["properties"] + res.json()["subobjects"]:
        assert entry["required"] in (0, 1)
        assert not isinstance(entry["required"], bool)
    address = res.json()["subobjects"][0]
    assert address["shared"] == 1
    assert address["required"] == 1


async def test_resolve_strips_prefixes(client, imported_schema):
    res = await client.post(
        "/api/v1/multi-category/resolve",
        json={"categories": ["Category:Company", " category:Person "]},
    )
    assert res.status_code == 200
    assert res.json()["categories"] == ["Company", "Person"]


async def test_resolve_alphabetical(client, imported_schema):
    res = await client.post(
        "/api/v1/multi-category/resolve",
        json={"categories": ["Person", "Company"], "alphabetical": True},
    )
    assert res.json()["categories"] == ["Company", "Person"]


async def test_resolve_empty_selection(client, imported_schema):
    res = await client.post("/api/v1/multi-category/resolve", json={"categories": []})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "EMPTY_SELECTION"


async def test_resolve_unknown_category_fails_whole_request(client, imported_schema):
    res = await client.post(
        "/api/v1/multi-category/resolve", json={"categories": ["Person", "Ghost"]},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "UNKNOWN_CATEGORY"


async def test_resolve_rejects_malformed_body(client):
    res = await client.post("/api/v1/multi-category/resolve", json={"categories": "Person"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── generate ────────────────────────────────────────────────────

async def test_generate_open_without_token(client, imported_schema):
    res = await client.post(
        "/api/v1/multi-category/generate", json={"categories": ["Person", "Employee"]},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["name"] == "Employee+Person"
    assert [u["category"] for u in data["units"]] == ["Person", "Employee"]
    assert [u["primary"] for u in data["units"]] == [1, 0]
    person_fields = [f["name"] for f in data["units"][0]["fields"]]
    assert person_fields == ["Has name", "Has email"]
    assert [f["name"] for f in data["units"][1]["fields"]] == ["Has employee ID"]
    assert "{{{for template|Person}}}" in data["rendered"]["form"]
    assert set(data["rendered"]["templates"]) == {"Person", "Employee"}
    assert "Subobject/Address" in data["rendered"]["subobject_templates"]
    assert len(data["schema_hash"]) == 40


async def test_generate_name_independent_of_order(client, imported_schema):
    a = await client.post(
        "/api/v1/multi-category/generate", json={"categories": ["Person", "Company"]},
    )
    b = await client.post(
        "/api/v1/multi-category/generate", json={"categories": ["Company", "Person"]},
    )
    assert a.json()["name"] == b.json()["name"] == "Company+Person"


async def test_generate_requires_token_when_configured(client, imported_schema, edit_token):
    res = await client.post(
        "/api/v1/multi-category/generate", json={"categories": ["Person"]},
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "PERMISSION_DENIED"


async def test_generate_with_valid_token(client, imported_schema, edit_token):
    res = await client.post(
        "/api/v1/multi-category/generate",
        json={"categories": ["Person"]},
        headers={"Authorization": f"Bearer {edit_token}"},
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Person"


async def test_resolve_stays_open_with_token_configured(client, imported_schema, edit_token):
    res = await client.post(
        "/api/v1/multi-category/resolve", json={"categories": ["Person"]},
    )
    assert res.status_code == 200
