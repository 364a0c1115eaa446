"""Health check and environment metadata endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter

from backoffice.api.deps import ConfigDep, RedisDep
from backoffice.api.envelope import ok
from backoffice.core.environment import get_environment_info, to_dict

logger = structlog.get_logger()
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(config: ConfigDep, redis: RedisDep):
    """Service health. Redis is only pinged when rate limiting uses it."""
    redis_status = "disabled"
    if config.rate_limit_enabled:
        redis_status = "connected"
        try:
            await redis.ping()
        except Exception as exc:
            logger.error("health_check_redis_failed", error=str(exc))
            redis_status = "disconnected"

    return ok(
        {
            "status": "degraded" if redis_status == "disconnected" else "healthy",
            "redis": redis_status,
            "environment": to_dict(get_environment_info(config)),
        }
    )


@router.get("/environment")
async def environment(config: ConfigDep):
    return ok(to_dict(get_environment_info(config)))
