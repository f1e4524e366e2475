"""Tests for the /health endpoint."""

from fastapi.testclient import TestClient


def test_health_returns_ok(client: TestClient) -> None:
    """GET /health should report the in-memory database as connected."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}


def test_health_does_not_touch_encounter(client: TestClient) -> None:
    client.get("/health")
    characters = client.get("/combat/characters").json()
    assert all(not c["defeated"] for c in characters)
