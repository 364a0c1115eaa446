"""ads.py — Advertisement moderation for admins.

Called by: main.py
Depends on: api/deps.py, mock/datasets.py (AdvertisementStore)
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

router = APIRouter(prefix="/mock/advertising/ads", tags=["ads"], dependencies=[Depends(simulate_latency)])

AdSortField = Literal["createdAt", "updatedAt", "startAt", "endAt", "price", "impressions", "clicks", "ctr"]


def _not_found(ad_id: str) -> NotFoundError:
    return NotFoundError(f"Advertisement '{ad_id}' not found")


def _split(values: list[str] | None) -> list[str] | None:
    """Accept both ``?status=a&status=b`` and ``?status=a,b``."""
    if not values:
        return None
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


@router.get("")
async def list_ads(
    registry: Registry,
    page_params: PageParams,
    q: Annotated[str | None, Query()] = None,
    status: Annotated[list[str] | None, Query()] = None,
    placement: Annotated[list[str] | None, Query()] = None,
    guide_id: Annotated[str | None, Query(alias="guideId")] = None,
    with_deleted: Annotated[bool, Query(alias="withDeleted")] = False,
    sort_by: Annotated[AdSortField, Query(alias="sortBy")] = "createdAt",
    sort_dir: Annotated[Literal["asc", "desc"], Query(alias="sortDir")] = "desc",
):
    items = registry.advertisements.query(
        q=q,
        status=_split(status),
        placement=_split(placement),
        guide_id=guide_id,
        with_deleted=with_deleted,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
    return ok(paginate(items, *page_params))


@router.get("/overview")
async def ads_overview(registry: Registry):
    return ok(registry.advertisements.overview())


@router.get("/{ad_id}")
async def get_ad(ad_id: str, registry: Registry):
    ad = registry.advertisements.find_by_id(ad_id)
    if ad is None:
        raise _not_found(ad_id)
    return ok(ad)


@router.delete("/{ad_id}", dependencies=WRITE_GUARDS)
async def delete_ad(ad_id: str, registry: Registry, user: CurrentUser):
    """Soft delete; the ad stays visible with ``withDeleted=true``."""
    ad = registry.advertisements.soft_delete(ad_id, deleted_by=f"admin:{user['id']}")
    if ad is None:
        raise _not_found(ad_id)
    return ok(ad)


@router.post("/{ad_id}/restore", dependencies=WRITE_GUARDS)
async def restore_ad(ad_id: str, registry: Registry):
    ad = registry.advertisements.restore(ad_id)
    if ad is None:
        raise _not_found(ad_id)
    return ok(ad)


@router.post("/{ad_id}/actions", dependencies=WRITE_GUARDS)
async def ad_action(ad_id: str, registry: Registry, payload: Annotated[Any, Body()]):
    """Apply an admin action: approve, reject, pause, resume, expire, cancel."""
    ad = registry.advertisements.perform_action(ad_id, payload)
    if ad is None:
        raise _not_found(ad_id)
    return ok(ad)
