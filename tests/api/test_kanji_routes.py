"""Kanji CRUD routes — create, read, update, delete and delete-all through the HTTP surface.

Invariants:
    - Duplicate character → 409 naming the field; collection size unchanged
    - Empty/absent character → 400; nothing persisted
    - Unknown or malformed id → 404 for GET, PUT and DELETE
    - PUT merges only supplied fields
"""

from uuid import uuid4

WATER = {"character": "水", "onyomi": "スイ", "kunyomi": "みず", "meaning": "water"}


async def _count(client) -> int:
    res = await client.get("/api/kanji")
    return len(res.json())


async def test_root_lists_endpoints(client):
    res = await client.get("/")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "OK"
    assert any(e.startswith("/api/kanji") for e in body["endpoints"])


async def test_list_empty_collection_returns_empty_array(client):
    res = await client.get("/api/kanji")
    assert res.status_code == 200
    assert res.json() == []


async def test_create_returns_201_with_assigned_id(client):
    res = await client.post("/api/kanji", json=WATER)
    assert res.status_code == 201
    body = res.json()
    assert body["id"]
    assert body["character"] == "水"
    assert body["meaning"] == "water"


async def test_created_kanji_listed_exactly_once(client):
    await client.post("/api/kanji", json=WATER)
    res = await client.get("/api/kanji")
    characters = [k["character"] for k in res.json()]
    assert characters.count("水") == 1


async def test_create_defaults_missing_fields_to_empty_string(client):
    res = await client.post("/api/kanji", json={"character": "山"})
    assert res.status_code == 201
    body = res.json()
    assert body["onyomi"] == ""
    assert body["kunyomi"] == ""
    assert body["meaning"] == ""


async def test_create_strips_character_whitespace(client):
    res = await client.post("/api/kanji", json={"character": " 川 "})
    assert res.json()["character"] == "川"


async def test_create_duplicate_character_returns_409(client):
    await client.post("/api/kanji", json=WATER)
    res = await client.post("/api/kanji", json={"character": "水"})
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_KEY"
    assert error["field"] == "character"
    assert await _count(client) == 1


async def test_create_without_character_returns_400(client):
    res = await client.post("/api/kanji", json={"meaning": "nothing"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any("character" in d["field"] for d in error["details"])
    assert await _count(client) == 0


async def test_create_with_blank_character_returns_400(client):
    for character in ("", "   "):
        res = await client.post("/api/kanji", json={"character": character})
        assert res.status_code == 400
    assert await _count(client) == 0


async def test_create_rejects_unknown_fields(client):
    res = await client.post(
        "/api/kanji", json={"character": "人", "strokes": 2},
    )
    assert res.status_code == 400
    assert await _count(client) == 0


async def test_get_by_id_returns_record(client, seed_kanji):
    target = seed_kanji[0]
    res = await client.get(f"/api/kanji/{target.id}")
    assert res.status_code == 200
    assert res.json()["character"] == target.character


async def test_get_unknown_id_returns_404(client):
    res = await client.get(f"/api/kanji/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_get_malformed_id_returns_404(client):
    res = await client.get("/api/kanji/not-a-valid-id")
    assert res.status_code == 404


async def test_update_overwrites_only_supplied_fields(client, seed_kanji):
    target = seed_kanji[0]
    res = await client.put(
        f"/api/kanji/{target.id}", json={"meaning": "liquid water"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["meaning"] == "liquid water"
    assert body["onyomi"] == target.onyomi
    assert body["kunyomi"] == target.kunyomi
    assert body["character"] == target.character


async def test_update_unknown_id_returns_404(client, seed_kanji):
    res = await client.put(f"/api/kanji/{uuid4()}", json={"meaning": "x"})
    assert res.status_code == 404
    assert await _count(client) == len(seed_kanji)


async def test_update_to_existing_character_returns_409(client, seed_kanji):
    res = await client.put(
        f"/api/kanji/{seed_kanji[0].id}",
        json={"character": seed_kanji[1].character},
    )
    assert res.status_code == 409
    assert res.json()["error"]["field"] == "character"
    unchanged = await client.get(f"/api/kanji/{seed_kanji[0].id}")
    assert unchanged.json()["character"] == seed_kanji[0].character


async def test_update_with_empty_character_returns_400(client, seed_kanji):
    res = await client.put(
        f"/api/kanji/{seed_kanji[0].id}", json={"character": ""},
    )
    assert res.status_code == 400


async def test_update_with_null_field_returns_400(client, seed_kanji):
    res = await client.put(
        f"/api/kanji/{seed_kanji[0].id}", json={"meaning": None},
    )
    assert res.status_code == 400


async def test_delete_removes_record(client, seed_kanji):
    target = seed_kanji[0]
    res = await client.delete(f"/api/kanji/{target.id}")
    assert res.status_code == 200
    assert res.json() == {"message": "Kanji deleted successfully"}
    assert (await client.get(f"/api/kanji/{target.id}")).status_code == 404
    assert await _count(client) == len(seed_kanji) - 1


async def test_delete_unknown_id_returns_404(client, seed_kanji):
    res = await client.delete(f"/api/kanji/{uuid4()}")
    assert res.status_code == 404
    assert await _count(client) == len(seed_kanji)


async def test_delete_all_reports_count_and_empties_collection(client, seed_kanji):
    res = await client.delete("/api/kanji")
    assert res.status_code == 200
    assert res.json() == {"deletedCount": len(seed_kanji)}
    assert (await client.get("/api/kanji")).json() == []


async def test_delete_all_on_empty_collection_reports_zero(client):
    res = await client.delete("/api/kanji")
    assert res.json() == {"deletedCount": 0}


async def test_full_lifecycle_scenario(client):
    created = await client.post("/api/kanji", json=WATER)
    assert created.status_code == 201
    kanji_id = created.json()["id"]

    fetched = await client.get(f"/api/kanji/{kanji_id}")
    assert fetched.status_code == 200
    for key, value in WATER.items():
        assert fetched.json()[key] == value

    updated = await client.put(
        f"/api/kanji/{kanji_id}", json={"meaning": "liquid water"},
    )
    assert updated.status_code == 200
    assert updated.json()["meaning"] == "liquid water"
    assert updated.json()["onyomi"] == "スイ"
    assert updated.json()["kunyomi"] == "みず"

    assert (await client.delete(f"/api/kanji/{kanji_id}")).status_code == 200
    assert (await client.get(f"/api/kanji/{kanji_id}")).status_code == 404
