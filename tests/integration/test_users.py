"""Integration tests for console users."""

import pytest


pytestmark = pytest.mark.integration


class TestCreateUser:
    """Tests for POST /api/v1/users."""

    async def test_defaults(self, client, organization):
        response = await client.post(
            "/api/v1/users",
            json={
                "email": "staff@acme.io",
                "organizationId": organization["id"],
                "firstName": "Sita",
                "role": "manager",
            },
        )

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["email"] == "staff@acme.io"
        assert user["organization_id"] == organization["id"]
        assert user["login_type"] == "manual"
        assert user["force_reset"] is True
        assert user["permissions"] == {}
        assert user["status"] == "active"
        assert "password_hash" not in user

    async def test_duplicate_email_conflicts(self, client):
        await client.post("/api/v1/users", json={"email": "staff@acme.io"})

        response = await client.post("/api/v1/users", json={"email": "staff@acme.io"})

        assert response.status_code == 409
        assert response.json()["email"] == "staff@acme.io"

    async def test_email_must_be_valid(self, client):
        response = await client.post("/api/v1/users", json={"email": "staff"})

        assert response.status_code == 422

    async def test_missing_optional_column_is_skipped(self, client, drop_column):
        await drop_column("users", "department")

        response = await client.post(
            "/api/v1/users", json={"email": "staff@acme.io", "department": "Sales"}
        )

        assert response.status_code == 201
        assert "department" not in response.json()["user"]
