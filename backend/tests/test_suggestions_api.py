def _create(client, payload):
    res = client.post("/api/suggestions", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


def test_create_suggestion(client, suggestion_payload):
    body = _create(client, suggestion_payload)
    assert body == {**suggestion_payload, "id": 1}


def test_create_suggestion_requires_description(client, suggestion_payload):
    del suggestion_payload["description"]
    res = client.post("/api/suggestions", json=suggestion_payload)
    assert res.status_code == 400
    assert res.json()["fields"][0]["field"] == "description"


def test_create_suggestion_rejects_unknown_difficulty(client, suggestion_payload):
    suggestion_payload["difficultyLevels"] = ["easy", "brutal"]
    assert client.post("/api/suggestions", json=suggestion_payload).status_code == 400


def test_list_requires_subject_and_grade(client):
    res = client.get("/api/suggestions", params={"subject": "Mathematics"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Subject and grade are required"
    assert body["fields"] == [{"field": "grade", "message": "Field required"}]
    assert client.get("/api/suggestions").status_code == 400


def test_list_filters_and_limits(client, suggestion_payload):
    for i in range(4):
        _create(client, {**suggestion_payload, "title": f"Topic {i}"})
    _create(client, {**suggestion_payload, "subject": "Science"})
    _create(client, {**suggestion_payload, "grade": "10th Grade"})

    res = client.get("/api/suggestions?subject=Mathematics&grade=9th+Grade&limit=2")
    assert res.status_code == 200
    body = res.json()
    assert len(body) <= 2
    assert all(s["subject"] == "Mathematics" and s["grade"] == "9th Grade" for s in body)
    assert [s["title"] for s in body] == ["Topic 0", "Topic 1"]


def test_list_default_limit_is_ten(client, suggestion_payload):
    for i in range(12):
        _create(client, {**suggestion_payload, "title": f"Topic {i}"})
    body = client.get("/api/suggestions", params={"subject": "Mathematics", "grade": "9th Grade"}).json()
    assert len(body) == 10


def test_list_zero_limit_returns_nothing(client, suggestion_payload):
    _create(client, suggestion_payload)
    params = {"subject": "Mathematics", "grade": "9th Grade", "limit": 0}
    res = client.get("/api/suggestions", params=params)
    assert res.status_code == 200
    assert res.json() == []


def test_list_rejects_bad_limit(client):
    params = {"subject": "Mathematics", "grade": "9th Grade"}
    assert client.get("/api/suggestions", params={**params, "limit": "many"}).status_code == 400
    assert client.get("/api/suggestions", params={**params, "limit": -1}).status_code == 400


def test_delete_suggestion(client, suggestion_payload):
    created = _create(client, suggestion_payload)
    assert client.delete(f"/api/suggestions/{created['id']}").status_code == 204
    res = client.delete(f"/api/suggestions/{created['id']}")
    assert res.status_code == 404
    assert res.json() == {"error": "Topic suggestion not found", "kind": "not_found"}
