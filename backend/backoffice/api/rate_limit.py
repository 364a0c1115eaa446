"""rate_limit.py — Redis-backed fixed-window rate limiting for mock writes.

Each caller gets one counter per minute window:
    rate:{category}:{identity}:{YYYY-MM-DDTHH:MM}

Counters are atomic via INCR and expire after one window. If Redis is
unreachable the request is allowed (fail-open) so a missing Redis never
breaks local frontend work.

Called by: api/deps.py (``enforce_rate_limit``)
Depends on: Redis (via deps.py), config.py (Settings)
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from backoffice.config import Settings
from backoffice.core.errors import RateLimitedError

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
_WINDOW_FORMAT = "%Y-%m-%dT%H:%M"


class RateLimiter:
    """Per-identity, per-category fixed-window limiter.

    Args:
        redis: Async Redis client.
        settings: Supplies ``rate_limit_per_minute``.
    """

    def __init__(self, redis: aioredis.Redis, settings: Settings) -> None:
        self._redis = redis
        self._settings = settings

    async def check_and_increment(self, identity: str, category: str = "mock_write") -> dict:
        """Count one request and enforce the per-minute limit.

        Args:
            identity: User id, or client address for anonymous callers.
            category: Bucket name so unrelated route groups do not share a counter.

        Returns:
            Dict with 'allowed', 'remaining', 'limit', 'reset_seconds' and
            'category' keys. 'degraded' is set when Redis was unavailable.

        Raises:
            RateLimitedError: 429 once the window's count exceeds the limit.
        """
        max_requests = self._settings.rate_limit_per_minute
        if max_requests <= 0:
            return {"allowed": True, "remaining": -1, "limit": -1, "reset_seconds": None, "category": category}

        window_key = datetime.now(UTC).strftime(_WINDOW_FORMAT)
        key = f"rate:{category}:{identity}:{window_key}"

        try:
            current = await self._redis.incr(key)
            if current == 1:
                await self._redis.expire(key, WINDOW_SECONDS)
            ttl = await self._redis.ttl(key)
        except RedisError as exc:
            logger.warning(
                "rate_limit_backend_unavailable; allowing request",
                extra={"category": category, "identity": identity, "error": str(exc)},
            )
            return {
                "allowed": True,
                "remaining": max_requests,
                "limit": max_requests,
                "reset_seconds": None,
                "category": category,
                "degraded": True,
            }

        if current > max_requests:
            raise RateLimitedError(max_requests, reset_seconds=ttl if ttl and ttl > 0 else WINDOW_SECONDS)

        return {
            "allowed": True,
            "remaining": max(0, max_requests - current),
            "limit": max_requests,
            "reset_seconds": ttl,
            "category": category,
        }
