"""Tests for Problem Details error responses."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, EmailStr

from expohub.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    register_exception_handlers,
)


class Payload(BaseModel):
    email: EmailStr


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Event not found", resource="event", resource_id="42")

    @app.get("/conflict")
    async def conflict():
        raise ConflictError("Already registered", error_code="already_registered")

    @app.get("/mismatch")
    async def mismatch():
        raise ForbiddenError(
            "Visitor is registered for a different event",
            error_code="EVENT_MISMATCH",
            details={"visitorEventId": 1, "requestedEventId": 2, "status": 999},
        )

    @app.post("/validate")
    async def validate(payload: Payload):
        return payload

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


@pytest.fixture
async def client():
    transport = ASGITransport(app=build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestAppExceptionHandler:
    """Tests for AppException rendering."""

    async def test_not_found(self, client):
        response = await client.get("/missing")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        assert body["code"] == "not_found"
        assert body["detail"] == "Event not found"
        assert body["title"] == "Not Found"
        assert body["instance"] == "/missing"
        assert body["type"].endswith("/errors/not_found")
        assert body["resource"] == "event"
        assert body["resource_id"] == "42"

    async def test_custom_error_code(self, client):
        response = await client.get("/conflict")

        assert response.status_code == 409
        assert response.json()["code"] == "already_registered"

    async def test_details_do_not_override_standard_fields(self, client):
        response = await client.get("/mismatch")

        body = response.json()
        assert response.status_code == 403
        assert body["status"] == 403
        assert body["code"] == "EVENT_MISMATCH"
        assert body["visitorEventId"] == 1
        assert body["requestedEventId"] == 2


class TestValidationHandler:
    async def test_field_errors(self, client):
        response = await client.post("/validate", json={"email": "not-an-email"})

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "validation_error"
        assert body["errors"][0]["field"] == "email"

    async def test_missing_body_field(self, client):
        response = await client.post("/validate", json={})

        assert response.json()["errors"][0]["type"] == "missing"


class TestGenericHandler:
    async def test_unexpected_error_is_500(self, client):
        response = await client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "internal_error"
        # Outside production the exception is described
        assert body["error_type"] == "RuntimeError"
        assert body["error_message"] == "kaboom"
