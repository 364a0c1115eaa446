"""errors.py — Error taxonomy shared by stores, paginator and routes.

Every error carries an HTTP status and a stable machine-readable ``code``
so the envelope handler in ``api/envelope.py`` can translate it without
knowing where it was raised. Messages are always safe to show to users.

Called by: mock/*, api/*
Depends on: Nothing
"""

from __future__ import annotations


class ApiError(Exception):
    """Base class for errors that map cleanly to an HTTP response."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


# ─── 400 ──────────────────────────────────────────────────────────────────────


class InvalidPayloadError(ApiError):
    """Request body or parameters failed validation."""

    status_code = 400
    code = "INVALID_PAYLOAD"


class EmptyOrderListError(InvalidPayloadError):
    code = "EMPTY_ORDER_LIST"

    def __init__(self, message: str = "orderedIds must contain at least one id") -> None:
        super().__init__(message)


class InvalidPageSizeError(InvalidPayloadError):
    code = "INVALID_PAGE_SIZE"

    def __init__(self, page_size: int) -> None:
        super().__init__(f"pageSize must be a positive integer (got {page_size})")
        self.page_size = page_size


# ─── 401 ──────────────────────────────────────────────────────────────────────


class AuthenticationError(ApiError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication failed.") -> None:
        super().__init__(message)


# ─── 404 ──────────────────────────────────────────────────────────────────────


class NotFoundError(ApiError):
    status_code = 404
    code = "NOT_FOUND"


class GroupNotFoundError(NotFoundError):
    code = "GROUP_NOT_FOUND"

    def __init__(self, group_name: str) -> None:
        super().__init__(f"Enum group '{group_name}' not found")
        self.group_name = group_name


class ValueNotFoundError(NotFoundError):
    code = "VALUE_NOT_FOUND"

    def __init__(self, group_name: str, value_key: str) -> None:
        super().__init__(f"Value '{value_key}' not found in enum group '{group_name}'")
        self.group_name = group_name
        self.value_key = value_key


# ─── 409 / 429 ────────────────────────────────────────────────────────────────


class ConflictError(ApiError):
    status_code = 409
    code = "CONFLICT"


class VersionConflictError(ConflictError):
    code = "VERSION_CONFLICT"

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Version conflict: sent {expected}, current is {actual}")
        self.expected = expected
        self.actual = actual


class RateLimitedError(ApiError):
    status_code = 429
    code = "RATE_LIMITED"

    def __init__(self, limit: int, reset_seconds: int | None = None) -> None:
        super().__init__("You're making requests too quickly. Please wait a moment and try again.")
        self.limit = limit
        self.reset_seconds = reset_seconds
