def test_healthchecks(client):
    response = client.get("/api/v1/healthcheck")
    assert response.status_code == 200
    assert response.json() == {
        "statusCode": 200,
        "data": {"status": "OK"},
        "message": "Health check passed",
        "success": True,
    }
    assert client.get("/health").json()["status"] == "healthy"


def test_unknown_route_uses_failure_envelope(client):
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 404
    assert body["errors"] == []


def test_method_not_allowed_uses_failure_envelope(client):
    response = client.put("/api/v1/healthcheck")
    assert response.status_code == 405
    assert response.json()["success"] is False


def test_body_validation_errors_are_listed(client):
    response = client.post("/api/v1/users/login", json={"username": "alice"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"]
    assert all({"field", "message"} <= set(error) for error in body["errors"])
