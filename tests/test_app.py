def test_root_welcome(client):
    body = client.get("/").get_json()

    assert body["message"] == "Welcome to Techroot API"
    assert body["docs"] == "/health"


def test_health_reports_database(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert body["database"]["connected"] is True
    assert body["config"]["database"] == "sqlite"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_wrong_method_uses_error_envelope(client):
    response = client.get("/api/progress/lesson")

    assert response.status_code == 405
    assert response.get_json()["success"] is False
