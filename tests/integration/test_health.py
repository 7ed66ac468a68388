"""Tests for health and info endpoints."""

import pytest


pytestmark = pytest.mark.integration


class TestHealth:
    async def test_liveness(self, client):
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    async def test_readiness_checks_database(self, client):
        response = await client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["database"] == "ok"

    async def test_info(self, client):
        response = await client.get("/info")

        assert response.json()["app"] == "ExpoHub"

    async def test_request_id_is_echoed(self, client):
        response = await client.get("/health/live", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
