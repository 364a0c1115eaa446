"""Request-scoped middleware for the mock API.

Layers, outermost first:
    RequestIDMiddleware    → X-Request-ID in and out, bound into structlog context
    LoggingMiddleware      → One ``request_completed`` event per request
    MockHeadersMiddleware  → X-Backoffice-Env, no-store caching, nosniff/frame headers
    ErrorHandlerMiddleware → Unhandled exception → generic 500 envelope

Called by: main.py (``register_middleware()``)
Depends on: config.py (Settings), api/envelope.py
"""

from __future__ import annotations

import re
import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from backoffice.api.envelope import fail
from backoffice.config import get_settings

logger = structlog.get_logger()

INTERNAL_ERROR_MESSAGE = "Something went wrong on our side. Please try again shortly."

# Client-supplied ids are echoed into logs and headers, so keep them boring.
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._\-]{1,128}$")

_STATIC_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def _request_id_from(request: Request) -> str:
    incoming = request.headers.get("X-Request-ID", "")
    if _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse a well-formed client ``X-Request-ID`` or mint one.

    The id is stored on ``request.state`` and bound into structlog's
    contextvars so every log line for the request carries it.
    """

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        request_id = _request_id_from(request)
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        started = time.perf_counter()
        response: Response = await call_next(request)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request_completed",
            method=request.method,
            path=request.url.path,
            seed=request.query_params.get("seed"),
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response


class MockHeadersMiddleware(BaseHTTPMiddleware):
    """Tag responses with the environment and keep fixtures out of caches.

    Mock data changes on every unseeded request, so ``/mock`` responses are
    marked ``no-store``.
    """

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        response = await call_next(request)
        response.headers["X-Backoffice-Env"] = get_settings().app_env
        if request.url.path.startswith("/mock"):
            response.headers["Cache-Control"] = "no-store"
        response.headers.update(_STATIC_HEADERS)
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn any unhandled exception into a generic 500 envelope.

    The traceback is logged; the client only ever sees
    ``INTERNAL_ERROR`` with a fixed message.
    """

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        try:
            return await call_next(request)
        except Exception:
            logger.exception("unhandled_error", path=request.url.path, method=request.method)
            return fail("INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE, 500)


def register_middleware(app: FastAPI) -> None:
    """Register the middleware stack.

    Starlette wraps in reverse registration order, so RequestID ends up
    outermost and ErrorHandler innermost; its 500 still gets logged and
    tagged.
    """
    for middleware in (ErrorHandlerMiddleware, MockHeadersMiddleware, LoggingMiddleware, RequestIDMiddleware):
        app.add_middleware(middleware)
