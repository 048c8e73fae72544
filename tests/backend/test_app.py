"""
Tests for the application shell.

Tests:
- Health endpoints
- Request ID middleware
- Error payload shape
"""


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_readiness(client):
    resp = client.get("/health/ready")

    assert resp.status_code == 200
    assert resp.json()["checks"]["database"] is True


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert resp.headers["x-request-id"] == "req-123"


def test_request_id_is_generated(client):
    resp = client.get("/health")

    assert resp.headers["x-request-id"]


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert resp.json() == {"status": 404, "message": "Not Found"}
