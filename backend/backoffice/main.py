"""FastAPI application factory.

Builds the FastAPI app with middleware, envelope exception handlers,
routes, and lifespan events. Every ``/mock/*`` route is served from the
in-memory ``MockRegistry`` attached to ``app.state``.

Called by: Uvicorn (``uvicorn backoffice.main:app``)
Depends on: config.py, environment.py, api/routes/*, api/middleware.py, mock/registry.py
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backoffice import __version__
from backoffice.api.deps import close_redis
from backoffice.api.envelope import register_exception_handlers
from backoffice.api.middleware import register_middleware
from backoffice.api.routes import (
    ads,
    advertising,
    article_comments,
    chats,
    companies,
    dashboard,
    enums,
    guide_banners,
    guide_subscriptions,
    health,
    password_requests,
    payment_accounts,
    statistics,
)
from backoffice.config import get_settings
from backoffice.core.environment import validate_environment
from backoffice.mock.registry import MockRegistry, build_registry

_settings = get_settings()
_log_level = getattr(logging, _settings.log_level.upper(), logging.INFO)

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if not _settings.is_production
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(_log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)
logging.basicConfig(level=_log_level, format="%(levelname)s %(name)s %(message)s")

logger = structlog.get_logger()

ROUTERS = (
    health.router,
    dashboard.router,
    statistics.router,
    companies.router,
    payment_accounts.router,
    enums.router,
    guide_banners.router,
    guide_subscriptions.router,
    advertising.router,
    ads.router,
    chats.router,
    password_requests.router,
    article_comments.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Validate configuration on startup; close Redis on shutdown."""
    settings = get_settings()
    validate_environment(settings)
    logger.info(
        "app_startup",
        env=settings.app_env,
        seed=settings.mock_seed,
        auth_bypass=settings.mock_auth_bypass,
        rate_limit=settings.rate_limit_enabled,
    )
    yield
    await close_redis()
    logger.info("app_shutdown")


def create_app(registry: MockRegistry | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Args:
        registry: Stores to serve. Defaults to a fresh registry seeded
            with MOCK_SEED; tests pass their own for isolation.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Back-office Mock API",
        description="In-memory fixtures for the travel platform admin dashboard",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )
    app.state.registry = registry if registry is not None else build_registry(settings.mock_seed)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middleware(app)
    register_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()
