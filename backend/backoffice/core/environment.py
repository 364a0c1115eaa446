"""environment.py — Runtime environment snapshot and startup validation.

Reads APP_ENV and the mock/auth switches from settings and provides the
metadata served by ``/health`` and ``/environment``.

Environment overview:
    development → Console logs, auth bypass allowed, ``*`` origins tolerated.
    test        → Same as development; used by the test suite.
    staging     → JSON logs, real JWTs recommended.
    production  → JSON logs, AUTH_SECRET required, no auth bypass.

Called by: main.py (startup), middleware.py (headers), api/routes/health.py
Depends on: config.py (Settings)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from backoffice import __version__
from backoffice.config import Settings, get_settings

logger = logging.getLogger(__name__)

# ─── Valid Environments ───────────────────────────────────────────────────────

VALID_ENVS = frozenset({"development", "test", "staging", "production"})


# ─── Environment Info ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EnvironmentInfo:
    """Immutable snapshot of the current environment configuration."""

    app_env: str               # "development" | "test" | "staging" | "production"
    version: str
    seed: int | None           # Fixed fixture seed, if any
    features: dict[str, bool]


def get_environment_info(settings: Settings | None = None) -> EnvironmentInfo:
    """Build an EnvironmentInfo snapshot from current settings."""
    settings = settings or get_settings()

    features = {
        "auth_bypass": settings.mock_auth_bypass,
        "rate_limiting": settings.rate_limit_enabled,
        "simulated_latency": settings.latency_enabled,
        "deterministic_fixtures": settings.mock_seed is not None,
    }

    return EnvironmentInfo(
        app_env=settings.app_env,
        version=__version__,
        seed=settings.mock_seed,
        features=features,
    )


# ─── Startup Validation ──────────────────────────────────────────────────────


def _is_valid_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_environment(settings: Settings | None = None) -> None:
    """Validate environment configuration on startup.

    Checks:
        - APP_ENV is one of the valid environments.
        - ALLOWED_ORIGINS and APP_BASE_URL are full http(s) URLs.
        - Latency bounds are ordered.
        - Production has AUTH_SECRET, no auth bypass and no ``*`` origin.

    Called by: main.py ``lifespan()`` on app startup.

    Raises:
        ValueError: If APP_ENV is not a recognized environment.
        RuntimeError: If the configuration is unusable.
    """
    settings = settings or get_settings()

    if settings.app_env not in VALID_ENVS:
        raise ValueError(
            f"Invalid APP_ENV='{settings.app_env}'. "
            f"Must be one of: {sorted(VALID_ENVS)}"
        )

    allowed_origins = settings.allowed_origins_list
    is_production = settings.is_production

    if "*" in allowed_origins:
        if is_production:
            raise RuntimeError("ALLOWED_ORIGINS cannot contain '*' in production.")
        logger.warning("ALLOWED_ORIGINS contains '*'. This is unsafe outside local development.")

    invalid_origins = [o for o in allowed_origins if o != "*" and not _is_valid_http_url(o)]
    if invalid_origins:
        raise RuntimeError(f"ALLOWED_ORIGINS has invalid URL(s): {', '.join(invalid_origins)}")

    if not _is_valid_http_url(settings.normalized_app_base_url):
        raise RuntimeError("APP_BASE_URL must be a full http(s) URL (example: https://admin.example.com).")

    if settings.latency_enabled and not 0 <= settings.mock_latency_min_ms <= settings.mock_latency_max_ms:
        raise RuntimeError("MOCK_LATENCY_MIN_MS must be between 0 and MOCK_LATENCY_MAX_MS.")

    if settings.default_page_size <= 0:
        raise RuntimeError("DEFAULT_PAGE_SIZE must be a positive integer.")

    logger.info("Environment initialized: env=%s seed=%s", settings.app_env, settings.mock_seed)

    if not is_production:
        if not settings.mock_auth_bypass and not settings.auth_secret:
            logger.warning("AUTH_SECRET not set; mutating mock routes will reject every token.")
        return

    missing: list[str] = []
    if not settings.auth_secret:
        missing.append("AUTH_SECRET")
    if missing:
        logger.error("Production requires these env vars: %s", ", ".join(missing))
        raise RuntimeError("Production requires these env vars: " + ", ".join(missing))
    if settings.mock_auth_bypass:
        raise RuntimeError("MOCK_AUTH_BYPASS must be false in production.")


def to_dict(info: EnvironmentInfo) -> dict[str, Any]:
    """Serialize EnvironmentInfo to a JSON-safe dict (camelCase keys)."""
    return {
        "appEnv": info.app_env,
        "version": info.version,
        "seed": info.seed,
        "features": info.features,
    }
