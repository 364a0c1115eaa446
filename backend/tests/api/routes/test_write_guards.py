"""Tests for auth and rate limiting on mutating routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import jwt
import pytest

from backoffice.api.deps import get_config, get_redis
from backoffice.config import Settings

SECRET = "route-secret"


@pytest.fixture
def secured(app):
    app.dependency_overrides[get_config] = lambda: Settings(
        _env_file=None, app_env="test", mock_auth_bypass=False, auth_secret=SECRET
    )
    return app


@pytest.mark.anyio
async def test_reads_stay_public(client, secured):
    response = await client.get("/mock/chats")
    assert response.status_code == 200


@pytest.mark.anyio
async def test_write_without_token_is_401(client, secured, registry):
    message_id = registry.chat_messages.all()[0]["id"]
    response = await client.post(f"/mock/chats/{message_id}/read")

    assert response.status_code == 401
    assert response.json()["error"] == {"code": "UNAUTHORIZED", "message": "Authentication failed."}


@pytest.mark.anyio
async def test_write_with_token_succeeds(client, secured, registry):
    token = jwt.encode({"sub": "admin-9", "name": "Nine"}, SECRET, algorithm="HS256")
    message_id = registry.chat_messages.all()[0]["id"]
    response = await client.post(
        f"/mock/chats/{message_id}/read",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 200


@pytest.mark.anyio
async def test_rate_limit_returns_429(client, app, registry):
    redis = AsyncMock()
    redis.incr.return_value = 3
    redis.ttl.return_value = 30
    app.dependency_overrides[get_config] = lambda: Settings(
        _env_file=None, app_env="test", rate_limit_enabled=True, rate_limit_per_minute=2
    )
    app.dependency_overrides[get_redis] = lambda: redis

    message_id = registry.chat_messages.all()[0]["id"]
    response = await client.post(f"/mock/chats/{message_id}/read")

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMITED"
    assert response.headers["Retry-After"] == "30"
