"""Tests for the health endpoint."""

from fastapi.testclient import TestClient

from chatppc.api.main import create_app


def test_health_check():
    client = TestClient(create_app())

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_unknown_route_uses_error_body():
    client = TestClient(create_app())

    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["success"] is False
