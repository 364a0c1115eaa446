"""Dependency injection for API routes.

Provides FastAPI dependencies for configuration, the mock store registry,
per-request fixture generators, simulated latency, pagination params,
Redis, JWT authentication and rate limiting.

Called by: All route modules via type aliases (Registry, Fixtures, CurrentUser, etc.)
Depends on: config.py, mock/registry.py, mock/fixtures.py, api/rate_limit.py
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Annotated, Any

import jwt
import redis.asyncio as aioredis
from fastapi import Depends, Header, Query, Request

from backoffice.api.rate_limit import RateLimiter
from backoffice.config import Settings, get_settings
from backoffice.core.errors import AuthenticationError
from backoffice.mock.fixtures import FixtureGenerator
from backoffice.mock.pagination import parse_page_params
from backoffice.mock.registry import MockRegistry

logger = logging.getLogger(__name__)

# ─── Settings ──────────────────────────────────────────────────────────────────


def get_config() -> Settings:
    """Return the application config."""
    return get_settings()


ConfigDep = Annotated[Settings, Depends(get_config)]

# ─── Mock Data ─────────────────────────────────────────────────────────────────


def get_registry(request: Request) -> MockRegistry:
    """Return the store registry attached to the running app."""
    return request.app.state.registry


Registry = Annotated[MockRegistry, Depends(get_registry)]


def get_fixtures(
    config: ConfigDep,
    seed: Annotated[int | None, Query(description="Fixture seed; same seed, same data")] = None,
) -> FixtureGenerator:
    """Fresh generator per request, seeded by ``?seed=`` or MOCK_SEED."""
    return FixtureGenerator(seed if seed is not None else config.mock_seed)


Fixtures = Annotated[FixtureGenerator, Depends(get_fixtures)]


async def simulate_latency(config: ConfigDep) -> None:
    """Sleep a random MOCK_LATENCY_MIN_MS..MOCK_LATENCY_MAX_MS before responding."""
    if not config.latency_enabled:
        return
    delay_ms = random.uniform(max(config.mock_latency_min_ms, 0), config.mock_latency_max_ms)
    await asyncio.sleep(delay_ms / 1000)


def get_page_params(
    config: ConfigDep,
    page: Annotated[str | None, Query()] = None,
    page_size: Annotated[str | None, Query(alias="pageSize")] = None,
) -> tuple[int, int]:
    """Parse ``?page=&pageSize=``; raises InvalidPageSizeError for sizes <= 0."""
    return parse_page_params(page, page_size, config.default_page_size)


PageParams = Annotated[tuple[int, int], Depends(get_page_params)]

# ─── Redis ─────────────────────────────────────────────────────────────────────

_redis_pool: aioredis.Redis | None = None


async def get_redis(config: ConfigDep) -> aioredis.Redis:
    """Return a Redis connection from pool."""
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(config.redis_url, decode_responses=True)
    return _redis_pool


async def close_redis() -> None:
    global _redis_pool
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None


RedisDep = Annotated[aioredis.Redis, Depends(get_redis)]

# ─── Auth ──────────────────────────────────────────────────────────────────────

MOCK_ADMIN: dict[str, Any] = {
    "id": "mock-admin",
    "email": "admin@backoffice.local",
    "name": "Mock Admin",
    "role": "admin",
}


async def get_current_user(
    config: ConfigDep,
    authorization: Annotated[str | None, Header()] = None,
) -> dict:
    """Validate a Bearer JWT and return the user context.

    With MOCK_AUTH_BYPASS on, every caller is the fixed mock admin.

    Args:
        config: Application settings (AUTH_SECRET, MOCK_AUTH_BYPASS).
        authorization: Bearer token from the Authorization header.

    Returns:
        Dict with id, email, name and role keys.

    Raises:
        AuthenticationError: 401 if the token is missing, malformed, expired
            or carries no identity.
    """
    if config.mock_auth_bypass:
        return dict(MOCK_ADMIN)

    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError()

    if not config.auth_secret:
        logger.error("AUTH_SECRET not set; rejecting auth tokens")
        raise AuthenticationError()

    token = authorization.split(" ", 1)[1]
    try:
        payload = jwt.decode(token, config.auth_secret, algorithms=["HS256"])
    except jwt.InvalidTokenError as exc:
        logger.warning("JWT validation failed: %s", exc)
        raise AuthenticationError() from exc

    sub = payload.get("sub")
    email = payload.get("email")
    if not sub and not email:
        raise AuthenticationError()

    return {
        "id": str(sub or email),
        "email": email,
        "name": payload.get("name"),
        "role": payload.get("role", "admin"),
    }


CurrentUser = Annotated[dict, Depends(get_current_user)]

# ─── Rate Limiting ─────────────────────────────────────────────────────────────


async def get_rate_limiter(redis: RedisDep, config: ConfigDep) -> RateLimiter:
    return RateLimiter(redis=redis, settings=config)


async def enforce_rate_limit(
    config: ConfigDep,
    user: CurrentUser,
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
) -> None:
    """Count one mutating request against the caller's minute window."""
    if not config.rate_limit_enabled:
        return
    await limiter.check_and_increment(user["id"])


# Attach to mutating routes: ``dependencies=WRITE_GUARDS``.
WRITE_GUARDS = [Depends(get_current_user), Depends(enforce_rate_limit)]
