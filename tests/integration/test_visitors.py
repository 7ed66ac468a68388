"""Integration tests for visitor registration, sign-in and check-in lookups."""

import re

import pytest

from tests.factories.visitor import VisitorPayloadFactory


pytestmark = pytest.mark.integration


@pytest.fixture
async def visitor(client, event) -> dict:
    response = await client.post(
        "/api/v1/visitors",
        json={
            "eventId": event["id"],
            "firstName": "Ravi",
            "lastName": "Kumar",
            "email": "ravi@example.in",
            "mobile": "+91 98480 22338",
            "age": "25-34",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestRegisterVisitor:
    async def test_code_and_default_credentials(self, visitor, mailer):
        assert re.fullmatch(r"VIS-[A-HJ-NP-Z2-9]{8}", visitor["unique_code"])
        assert visitor["visitor"]["unique_code"] == visitor["unique_code"]
        assert visitor["visitor"]["age_group"] == "25-34"
        assert visitor["credentials"]["password"] == "ravi@123"
        assert visitor["email_sent"] is True
        assert visitor["sms_sent"] is False
        assert visitor["unique_code"] in mailer.sent[-1].text

    async def test_sms_when_opted_in(self, client, event, texter):
        response = await client.post(
            "/api/v1/visitors",
            json={"eventId": event["id"], "mobile": "9848022338", "communication": {"sms": True}},
        )

        body = response.json()
        assert body["sms_sent"] is True
        assert body["email_sent"] is False
        assert body["unique_code"] in texter.sent[-1].body

    async def test_codes_are_unique(self, client, event):
        payloads = VisitorPayloadFactory.batch(5, event_id=event["id"])

        codes = set()
        for payload in payloads:
            response = await client.post("/api/v1/visitors", json=payload.model_dump())
            assert response.json()["credentials"]["password"] == f"{payload.email.split('@')[0]}@123"
            codes.add(response.json()["unique_code"])

        assert len(codes) == 5

    async def test_list_includes_event_name(self, client, visitor):
        response = await client.get("/api/v1/visitors")

        [item] = response.json()
        assert item["id"] == visitor["visitor"]["id"]
        assert item["event_name"] == "Build Expo 2099"
        assert "password_hash" not in item


class TestVisitorLogin:
    async def test_password(self, client, visitor):
        response = await client.post(
            "/api/v1/visitors/login", json={"email": "ravi@example.in", "password": "ravi@123"}
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["name"] == "Ravi Kumar"
        assert user["unique_code"] == visitor["unique_code"]

    async def test_mobile_number_without_formatting(self, client, visitor):
        response = await client.post(
            "/api/v1/visitors/login", json={"email": "ravi@example.in", "password": "9848022338"}
        )

        assert response.status_code == 200

    async def test_wrong_secret(self, client, visitor):
        response = await client.post(
            "/api/v1/visitors/login", json={"email": "ravi@example.in", "password": "1234"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password/phone number"


class TestCheckInLookup:
    async def test_lookup(self, client, visitor, event):
        response = await client.get(f"/api/v1/visitors/code/{visitor['unique_code']}")

        assert response.status_code == 200
        found = response.json()["visitor"]
        assert found["id"] == visitor["visitor"]["id"]
        assert found["event_name"] == "Build Expo 2099"
        assert found["organization_id"] == event["organization_id"]

    async def test_lookup_for_matching_event(self, client, visitor, event):
        response = await client.get(
            f"/api/v1/visitors/code/{visitor['unique_code']}", params={"eventId": event["id"]}
        )

        assert response.status_code == 200

    async def test_lookup_for_other_event(self, client, visitor, event):
        response = await client.get(
            f"/api/v1/visitors/code/{visitor['unique_code']}", params={"eventId": event["id"] + 100}
        )

        assert response.status_code == 403
        body = response.json()
        assert body["code"] == "EVENT_MISMATCH"
        assert body["visitor_event_id"] == event["id"]
        assert body["visitor_event_name"] == "Build Expo 2099"
        assert body["scanned_event_id"] == event["id"] + 100

    async def test_unknown_code(self, client):
        response = await client.get("/api/v1/visitors/code/VIS-ZZZZZZZZ")

        assert response.status_code == 404
