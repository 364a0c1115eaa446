"""Tests for the app shell: envelope, error mapping, middleware, health."""

from __future__ import annotations

import pytest
from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient


@pytest.mark.anyio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200

    body = response.json()
    assert body["success"] is True
    assert body["error"] is None
    assert body["data"]["status"] == "healthy"
    assert body["data"]["redis"] == "disabled"


@pytest.mark.anyio
async def test_environment_endpoint(client):
    body = (await client.get("/environment")).json()
    assert body["data"]["appEnv"] == "test"


@pytest.mark.anyio
async def test_response_headers(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-Backoffice-Env" in response.headers
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "Cache-Control" not in response.headers


@pytest.mark.anyio
async def test_malformed_request_id_is_replaced(client):
    response = await client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
    assert response.headers["X-Request-ID"] != "bad id with spaces"
    assert len(response.headers["X-Request-ID"]) == 32


@pytest.mark.anyio
async def test_mock_responses_are_not_cached(client):
    response = await client.get("/mock/dashboard/stats")
    assert response.headers["Cache-Control"] == "no-store"


@pytest.mark.anyio
async def test_unknown_route_uses_failure_envelope(client):
    response = await client.get("/mock/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body == {"success": False, "data": None, "error": {"code": "NOT_FOUND", "message": "Not Found"}}


@pytest.mark.anyio
async def test_bad_query_type_is_400(client):
    response = await client.get("/mock/dashboard/recent-bookings?count=abc")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PAYLOAD"


@pytest.mark.anyio
async def test_unhandled_error_is_generic_500(app):
    """The original exception is logged, never returned."""
    boom = APIRouter()

    @boom.get("/boom")
    async def explode():
        raise RuntimeError("database password is hunter2")

    app.include_router(boom)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert "hunter2" not in response.text
