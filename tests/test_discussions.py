from models.discussions import ModuleDiscussion


def _post(client, headers, module_id="html", **payload):
    return client.post(f"/api/discussions/{module_id}", json=payload, headers=headers)


def test_post_and_list_messages_in_order(client, learner, other_learner):
    user, headers = learner
    other, other_headers = other_learner

    first = _post(client, headers, content="How do I center a div?")
    _post(client, other_headers, content="Use flexbox", images=["https://img.example.com/a.png"])
    _post(client, headers, module_id="css", content="Different module")

    assert first.status_code == 201
    message = first.get_json()["data"]
    assert message["sender"] == {"id": user["id"], "name": user["name"], "avatar": None}
    assert message["images"] == []
    assert message["timestamp"]

    listing = client.get("/api/discussions/html")
    assert listing.status_code == 200
    messages = listing.get_json()["data"]
    assert [m["content"] for m in messages] == ["How do I center a div?", "Use flexbox"]
    assert messages[1]["sender"]["id"] == other["id"]
    assert messages[1]["images"] == ["https://img.example.com/a.png"]


def test_listing_is_public(client):
    response = client.get("/api/discussions/unknown-module")

    assert response.status_code == 200
    assert response.get_json()["data"] == []


def test_posting_requires_token(client):
    assert client.post("/api/discussions/html", json={"content": "hi"}).status_code == 401


def test_empty_message_is_rejected(client, learner):
    _, headers = learner

    assert _post(client, headers).status_code == 400
    assert _post(client, headers, content="", images=[]).status_code == 400
    assert _post(client, headers, images="https://img.example.com/a.png").status_code == 400


def test_image_only_message_is_allowed(client, learner):
    _, headers = learner
    response = _post(client, headers, images=["https://img.example.com/b.png"])

    assert response.status_code == 201
    assert response.get_json()["data"]["content"] is None


def test_non_author_cannot_delete(client, learner, other_learner, app):
    _, headers = learner
    _, other_headers = other_learner
    message_id = _post(client, headers, content="mine").get_json()["data"]["id"]

    response = client.delete(f"/api/discussions/html/{message_id}", headers=other_headers)

    assert response.status_code == 403
    assert ModuleDiscussion.query.filter_by(id=message_id).count() == 1


def test_author_can_delete(client, learner, app):
    _, headers = learner
    message_id = _post(client, headers, content="mine").get_json()["data"]["id"]

    response = client.delete(f"/api/discussions/html/{message_id}", headers=headers)

    assert response.status_code == 200
    assert ModuleDiscussion.query.filter_by(id=message_id).count() == 0


def test_delete_in_wrong_module_is_not_found(client, learner, app):
    _, headers = learner
    message_id = _post(client, headers, content="mine").get_json()["data"]["id"]

    response = client.delete(f"/api/discussions/css/{message_id}", headers=headers)

    assert response.status_code == 404
    assert ModuleDiscussion.query.filter_by(id=message_id).count() == 1
