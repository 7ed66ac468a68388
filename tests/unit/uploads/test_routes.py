"""Tests for the ground layout upload endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from expohub.core.storage import get_qr_storage
from expohub.main import app


@pytest.fixture
async def client(qr_storage):
    app.dependency_overrides[get_qr_storage] = lambda: qr_storage
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestUploadEndpoint:
    """Tests for POST /api/v1/upload/ground-layout."""

    async def test_upload(self, client, qr_storage):
        response = await client.post(
            "/api/v1/upload/ground-layout",
            files={"file": ("hall.jpg", b"jpeg-bytes", "image/jpeg")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["original_name"] == "hall.jpg"
        assert body["size"] == 10
        assert body["url"] == f"/uploads/{body['filename']}"
        assert (qr_storage.upload_dir / body["filename"]).exists()

    async def test_invalid_type(self, client):
        response = await client.post(
            "/api/v1/upload/ground-layout",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_file_type"

    async def test_file_required(self, client):
        response = await client.post("/api/v1/upload/ground-layout")

        assert response.status_code == 422
