def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "healthy"
    assert body["version"] == "0.1.0"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/v1/nope")

    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "NOT_FOUND"
    assert error["timestamp"]
    assert error["request_id"]
