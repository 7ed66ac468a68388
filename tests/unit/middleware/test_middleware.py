"""Tests for request ID tagging and client IP extraction."""

from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from expohub.core.logging import RequestIdMiddleware, RequestLoggingMiddleware, get_client_ip


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    @app.get("/whoami")
    async def whoami(request: Request):
        return {"ip": get_client_ip(request), "request_id": request.state.request_id}

    return app


async def get(path: str, headers: dict | None = None):
    transport = ASGITransport(app=build_app())
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        return await client.get(path, headers=headers)


class TestRequestId:
    async def test_generated_when_missing(self):
        response = await get("/whoami")

        request_id = response.headers["X-Request-ID"]
        assert len(request_id) == 36
        assert response.json()["request_id"] == request_id

    async def test_incoming_header_kept(self):
        response = await get("/whoami", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"
        assert response.json()["request_id"] == "req-42"


class TestClientIp:
    async def test_first_forwarded_address(self):
        response = await get("/whoami", headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})

        assert response.json()["ip"] == "203.0.113.7"

    async def test_real_ip_header(self):
        response = await get("/whoami", headers={"X-Real-IP": "198.51.100.4"})

        assert response.json()["ip"] == "198.51.100.4"

    async def test_socket_address(self):
        response = await get("/whoami")

        assert response.json()["ip"] == "127.0.0.1"
