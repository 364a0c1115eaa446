"""envelope.py — The one response shape every endpoint returns.

    {"success": true,  "data": <payload>, "error": null}
    {"success": false, "data": null, "error": {"code": "...", "message": "..."}}

Route handlers return ``ok(...)`` and raise ``ApiError`` subclasses; the
handlers registered here turn every error (ours, FastAPI's request
validation, Starlette's 404/405) into the failure shape.

Called by: api/routes/*, main.py (``register_exception_handlers()``)
Depends on: core/errors.py
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.core.errors import ApiError, RateLimitedError

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    400: "INVALID_PAYLOAD",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    429: "RATE_LIMITED",
}


def ok(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Wrap ``data`` in a success envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "data": jsonable_encoder(data, by_alias=True), "error": None},
    )


def created(data: Any) -> JSONResponse:
    return ok(data, status.HTTP_201_CREATED)


def fail(
    code: str,
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": None, "error": {"code": code, "message": message}},
        headers=headers,
    )


# ─── Exception Handlers ───────────────────────────────────────────────────────


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.info("api_error path=%s code=%s status=%d", request.url.path, exc.code, exc.status_code)
    headers = None
    if isinstance(exc, RateLimitedError) and exc.reset_seconds:
        headers = {"Retry-After": str(exc.reset_seconds)}
    return fail(exc.code, exc.message, exc.status_code, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Path/query/body type errors are plain 400s, not FastAPI's 422."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return fail("INVALID_PAYLOAD", message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_CODES.get(exc.status_code, "HTTP_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return fail(code, message, exc.status_code, getattr(exc, "headers", None))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
