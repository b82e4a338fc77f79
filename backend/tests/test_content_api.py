import pytest


def _create(client, payload):
    res = client.post("/api/content", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


def test_create_returns_record_with_id(client, content_payload):
    body = _create(client, content_payload)
    assert body["id"] == 1
    assert body["htmlContent"] == content_payload["htmlContent"]
    assert body["isPublic"] is False


def test_round_trip_equals_payload_plus_id(client, content_payload):
    created = _create(client, content_payload)
    res = client.get(f"/api/content/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {**content_payload, "id": created["id"]}


def test_ids_strictly_increase(client, content_payload):
    ids = [_create(client, content_payload)["id"] for _ in range(4)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 4
    client.delete(f"/api/content/{ids[-1]}")
    assert _create(client, content_payload)["id"] > ids[-1]


@pytest.mark.parametrize("field", ["title", "type", "subject", "grade", "difficulty", "htmlContent"])
def test_missing_required_field_is_rejected(client, content_payload, field):
    del content_payload[field]
    res = client.post("/api/content", json=content_payload)
    assert res.status_code == 400
    body = res.json()
    assert body["kind"] == "validation"
    assert field in [f["field"] for f in body["fields"]]
    assert client.get("/api/content").json() == []


@pytest.mark.parametrize("field,value", [("type", "essay"), ("difficulty", "extreme")])
def test_out_of_range_enum_is_rejected(client, content_payload, field, value):
    content_payload[field] = value
    res = client.post("/api/content", json=content_payload)
    assert res.status_code == 400
    assert client.get("/api/content").json() == []


def test_short_title_message_names_the_field(client, content_payload):
    content_payload["title"] = "Hi"
    res = client.post("/api/content", json=content_payload)
    assert res.status_code == 400
    body = res.json()
    assert body["fields"] == [{"field": "title", "message": "title must be at least 3 characters"}]
    assert 'at "title"' in body["error"]


def test_list_and_filter_by_user(client, content_payload):
    _create(client, content_payload)
    _create(client, {**content_payload, "createdById": 2})
    assert len(client.get("/api/content").json()) == 2
    mine = client.get("/api/content", params={"userId": 2}).json()
    assert [c["createdById"] for c in mine] == [2]
    assert client.get("/api/content", params={"userId": "abc"}).status_code == 400


def test_get_missing_content(client):
    res = client.get("/api/content/99")
    assert res.status_code == 404
    assert res.json() == {"error": "Content not found", "kind": "not_found"}


def test_non_numeric_id_is_a_validation_error(client):
    res = client.get("/api/content/abc")
    assert res.status_code == 400
    assert res.json()["fields"][0]["field"] == "content_id"


def test_patch_merges_partial_fields(client, content_payload):
    created = _create(client, content_payload)
    res = client.patch(f"/api/content/{created['id']}", json={"difficulty": "hard", "isPublic": True})
    assert res.status_code == 200
    body = res.json()
    assert body["difficulty"] == "hard"
    assert body["isPublic"] is True
    assert body["title"] == content_payload["title"]
    assert body["tags"] == content_payload["tags"]
    assert client.get(f"/api/content/{created['id']}").json() == body


def test_patch_rechecks_enumerations(client, content_payload):
    created = _create(client, content_payload)
    res = client.patch(f"/api/content/{created['id']}", json={"type": "essay"})
    assert res.status_code == 400
    assert client.get(f"/api/content/{created['id']}").json()["type"] == "notes"


def test_patch_null_clears_tags(client, content_payload):
    created = _create(client, content_payload)
    res = client.patch(f"/api/content/{created['id']}", json={"tags": None})
    assert res.status_code == 200
    assert res.json()["tags"] is None


def test_patch_missing_content_leaves_store_unchanged(client, content_payload):
    _create(client, content_payload)
    before = client.get("/api/content").json()
    res = client.patch("/api/content/42", json={"title": "Renamed"})
    assert res.status_code == 404
    assert client.get("/api/content").json() == before


def test_delete_twice(client, content_payload):
    created = _create(client, content_payload)
    first = client.delete(f"/api/content/{created['id']}")
    assert first.status_code == 204
    assert first.content == b""
    second = client.delete(f"/api/content/{created['id']}")
    assert second.status_code == 404


def test_stats_count_by_type(client, content_payload):
    for content_type in ("notes", "notes", "quiz", "paper"):
        _create(client, {**content_payload, "type": content_type})
    _create(client, {**content_payload, "type": "assignment", "createdById": 2})
    assert client.get("/api/content/stats").json() == {
        "notes": 2, "quiz": 1, "assignment": 1, "paper": 1, "total": 5,
    }
    assert client.get("/api/content/stats", params={"userId": 2}).json()["total"] == 1
