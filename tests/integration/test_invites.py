"""Integration tests for organization invites."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, select

from expohub.modules.organizations.models import OrganizationInvite


pytestmark = pytest.mark.integration


async def issue_invite(client, **contact) -> dict:
    response = await client.post("/api/v1/organizations/invites", json=contact)
    assert response.status_code == 201, response.text
    return response.json()


def token_of(body: dict) -> str:
    return body["invite_link"].split("?token=", 1)[1]


class TestCreateInvite:
    """Tests for POST /api/v1/organizations/invites."""

    async def test_delivers_link_by_email_and_sms(self, client, mailer, texter):
        body = await issue_invite(client, email="owner@acme.io", mobile="9848022338")

        assert body["invite"]["status"] == "PENDING"
        assert body["invite_link"] is None
        assert body["email_sent"] is True
        assert body["sms_sent"] is True
        assert "?token=" in mailer.sent[0].text
        assert "(Expires in 48h)" in texter.sent[0].body

    async def test_expiry_is_48_hours(self, client):
        body = await issue_invite(client, email="owner@acme.io")

        expires_at = datetime.fromisoformat(body["invite"]["expires_at"])
        created_at = datetime.fromisoformat(body["invite"]["created_at"])
        assert abs((expires_at - created_at) - timedelta(hours=48)) < timedelta(minutes=1)

    async def test_contact_required(self, client):
        response = await client.post("/api/v1/organizations/invites", json={})

        assert response.status_code == 400
        assert response.json()["code"] == "contact_required"

    async def test_invalid_email_rejected(self, client):
        response = await client.post("/api/v1/organizations/invites", json={"email": "not-an-email"})

        assert response.status_code == 422

    async def test_second_pending_invite_conflicts(self, client):
        await issue_invite(client, email="owner@acme.io")

        response = await client.post("/api/v1/organizations/invites", json={"email": "owner@acme.io"})

        assert response.status_code == 409
        assert response.json()["code"] == "invite_pending"

    async def test_test_identity_replaces_pending_invite(self, client, db, mailer):
        first = await issue_invite(client, email="qa.test@acme.io")
        second = await issue_invite(client, email="qa.test@acme.io")

        assert token_of(first) != token_of(second)
        assert mailer.sent == []
        count = await db.scalar(select(func.count()).select_from(OrganizationInvite))
        assert count == 1


class TestValidateInvite:
    async def test_pending_token(self, client):
        body = await issue_invite(client, email="qa.test@acme.io", mobile="0000111222")

        response = await client.get(f"/api/v1/organizations/invites/{token_of(body)}")

        assert response.status_code == 200
        assert response.json()["valid"] is True
        assert response.json()["email"] == "qa.test@acme.io"

    async def test_unknown_token(self, client):
        response = await client.get("/api/v1/organizations/invites/not-a-token")

        assert response.status_code == 404

    async def test_expired_token(self, client, db):
        db.add(
            OrganizationInvite(
                email="late@acme.io",
                invite_token="expired-token",
                status="PENDING",
                expires_at=datetime.now(UTC) - timedelta(minutes=1),
            )
        )
        await db.commit()

        validate = await client.get("/api/v1/organizations/invites/expired-token")
        accept = await client.post(
            "/api/v1/organizations/invites/expired-token/accept", json={"name": "Late Org"}
        )

        assert validate.status_code == 404
        assert accept.status_code == 409
        assert accept.json()["code"] == "invalid_invite_token"


class TestAcceptInvite:
    """Tests for POST /api/v1/organizations/invites/{token}/accept."""

    async def test_accept_creates_active_organization(self, client, mailer):
        token = token_of(await issue_invite(client, email="qa.test@acme.io", mobile="0000111222"))

        response = await client.post(
            f"/api/v1/organizations/invites/{token}/accept", json={"orgName": "Test Org"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["organization"]["org_name"] == "Test Org"
        assert body["organization"]["primary_email"] == "qa.test@acme.io"
        assert body["organization"]["primary_mobile"] == "0000111222"
        assert body["organization"]["status"] == "Active"
        assert body["credentials"]["password"] == "qa.test@123"
        assert mailer.sent[-1].subject == "Your Organization Has Been Created"

        login = await client.post(
            "/api/v1/organizations/login", json={"email": "qa.test@acme.io", "password": "qa.test@123"}
        )
        assert login.status_code == 200

    async def test_token_is_single_use(self, client):
        token = token_of(await issue_invite(client, email="qa.test@acme.io"))
        url = f"/api/v1/organizations/invites/{token}/accept"

        first = await client.post(url, json={"name": "Test Org"})
        second = await client.post(url, json={"name": "Test Org Again"})

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["code"] == "invalid_invite_token"

    async def test_concurrent_accepts_create_one_organization(self, client, db):
        token = token_of(await issue_invite(client, email="qa.test@acme.io"))
        url = f"/api/v1/organizations/invites/{token}/accept"

        responses = await asyncio.gather(
            client.post(url, json={"name": "Race One"}),
            client.post(url, json={"name": "Race Two"}),
        )

        assert sorted(r.status_code for r in responses) == [201, 409]
        organizations = (await client.get("/api/v1/organizations")).json()
        assert len(organizations) == 1

    async def test_existing_organization_email_conflicts(self, client, db, organization):
        await issue_invite(client, email="owner@acme.io")
        token = await db.scalar(
            select(OrganizationInvite.invite_token).where(OrganizationInvite.email == "owner@acme.io")
        )

        response = await client.post(
            f"/api/v1/organizations/invites/{token}/accept", json={"name": "Acme Again"}
        )

        assert response.status_code == 409
        assert response.json()["code"] == "organization_exists"
        # The failed accept leaves the invite usable
        assert (await client.get(f"/api/v1/organizations/invites/{token}")).status_code == 200

    async def test_name_required(self, client):
        token = token_of(await issue_invite(client, email="qa.test@acme.io"))

        response = await client.post(f"/api/v1/organizations/invites/{token}/accept", json={})

        assert response.status_code == 422
