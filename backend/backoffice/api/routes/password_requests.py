"""password_requests.py — Guide password-reset requests awaiting review.

Called by: main.py
Depends on: api/deps.py, mock/datasets.py (PasswordRequestStore)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Body, Depends, Query

from backoffice.api.deps import WRITE_GUARDS, CurrentUser, PageParams, Registry, simulate_latency
from backoffice.api.envelope import ok
from backoffice.core.errors import NotFoundError
from backoffice.mock.pagination import paginate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/mock/support/guide-password-requests",
    tags=["support"],
    dependencies=[Depends(simulate_latency)],
)

RequestStatus = Literal["pending", "approved", "rejected", "expired"]
RequestSort = Literal["newest", "oldest", "expiring", "updated"]


def _not_found(request_id: str) -> NotFoundError:
    return NotFoundError(f"Password request '{request_id}' not found")


@router.get("")
async def list_password_requests(
    registry: Registry,
    page_params: PageParams,
    status: Annotated[RequestStatus | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
    sort: Annotated[RequestSort, Query()] = "newest",
):
    items = registry.password_requests.search(status=status, search=search, sort=sort)
    return ok(paginate(items, *page_params))


@router.get("/stats")
async def password_request_stats(registry: Registry):
    return ok(registry.password_requests.stats())


@router.post("/{request_id}/approve", dependencies=WRITE_GUARDS)
async def approve_password_request(request_id: str, registry: Registry, user: CurrentUser):
    """Approve a pending request. 409 if it was already reviewed."""
    request = registry.password_requests.approve(request_id, reviewer=user)
    if request is None:
        raise _not_found(request_id)
    return ok(request)


@router.post("/{request_id}/reject", dependencies=WRITE_GUARDS)
async def reject_password_request(
    request_id: str,
    registry: Registry,
    user: CurrentUser,
    payload: Annotated[Any, Body()],
):
    request = registry.password_requests.reject(request_id, payload, reviewer=user)
    if request is None:
        raise _not_found(request_id)
    return ok(request)
