"""Tests for the GSTIN verification endpoint."""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from expohub.core.cache import MemoryCache
from expohub.core.constants import DEMO_GSTIN
from expohub.core.rate_limit import MemoryRateLimiter
from expohub.main import app
from expohub.modules.gstin.service import GstinService, get_gstin_service


ACTIVE = {"flag": True, "data": {"lgnm": "Urban Foods Private Limited", "sts": "Active"}}


@pytest.fixture
async def client():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=ACTIVE))
    service = GstinService(
        MemoryCache(),
        MemoryRateLimiter(),
        api_key="secret-key",
        base_url="https://gst.test",
        rate_limit=2,
        rate_window=60,
        transport=transport,
    )
    app.dependency_overrides[get_gstin_service] = lambda: service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestVerifyEndpoint:
    """Tests for POST /api/v1/gstin/verify."""

    async def test_verified(self, client):
        response = await client.post("/api/v1/gstin/verify", json={"gstin": "27aapfu0939f1zv"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["legalName"] == "Urban Foods Private Limited"
        assert body["data"]["panNumber"] == "AAPFU0939F"
        assert "error" not in body

    async def test_demo_sentinel(self, client):
        response = await client.post("/api/v1/gstin/verify", json={"gstin": DEMO_GSTIN})

        assert response.status_code == 200
        assert response.json()["data"]["tradeName"] == "Demo Company"

    async def test_invalid_format_is_400(self, client):
        response = await client.post("/api/v1/gstin/verify", json={"gstin": "ABC"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": response.json()["error"],
            "errorCode": "INVALID_FORMAT",
        }

    async def test_rate_limit_is_429(self, client):
        for _ in range(2):
            await client.post("/api/v1/gstin/verify", json={"gstin": "27AAPFU0939F1ZV"})

        response = await client.post("/api/v1/gstin/verify", json={"gstin": "27AAPFU0939F1ZV"})

        assert response.status_code == 429
        assert response.json()["errorCode"] == "RATE_LIMIT_EXCEEDED"

    async def test_missing_gstin_is_validation_error(self, client):
        response = await client.post("/api/v1/gstin/verify", json={})

        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"
