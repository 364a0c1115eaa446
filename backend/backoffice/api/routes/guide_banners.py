"""guide_banners.py — Ordered hero banners shown on the guide landing page.

``/reorder`` is declared before ``/{banner_id}`` so it is not captured as
an id.

Called by: main.py
Depends on: api/deps.py, mock/datasets.py (GuideBannerStore)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Body, Depends, Query

from backoffice.api.deps import WRITE_GUARDS, PageParams, Registry, simulate_latency
from backoffice.api.envelope import created, ok
from backoffice.core.errors import NotFoundError
from backoffice.mock.pagination import paginate
from backoffice.mock.store import validate_payload
from backoffice.models.schemas import ReorderPayload

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/mock/site-settings/guide-banners",
    tags=["guide-banners"],
    dependencies=[Depends(simulate_latency)],
)


def _not_found(banner_id: str) -> NotFoundError:
    return NotFoundError(f"Guide banner '{banner_id}' not found")


@router.get("")
async def list_guide_banners(
    registry: Registry,
    page_params: PageParams,
    active: Annotated[bool | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
    sort_by: Annotated[Literal["order", "createdAt", "updatedAt"], Query(alias="sortBy")] = "order",
    sort_dir: Annotated[Literal["asc", "desc"], Query(alias="sortDir")] = "asc",
):
    items = registry.guide_banners.list_banners(active=active, search=search, sort_by=sort_by, sort_dir=sort_dir)
    return ok(paginate(items, *page_params))


@router.post("", dependencies=WRITE_GUARDS)
async def create_guide_banner(registry: Registry, payload: Annotated[Any, Body()]):
    return created(registry.guide_banners.create(payload))


@router.post("/reorder", dependencies=WRITE_GUARDS)
async def reorder_guide_banners(registry: Registry, payload: Annotated[Any, Body()]):
    """Apply ``{orderedIds: [...]}`` and return every banner in its new order.

    An empty list is a 400. The collection version rides in ``X-Collection-Version``.
    """
    data = validate_payload(ReorderPayload, payload)
    banners = registry.guide_banners.reorder(data.ordered_ids)
    response = ok(banners)
    response.headers["X-Collection-Version"] = str(registry.guide_banners.version)
    return response


@router.get("/{banner_id}")
async def get_guide_banner(banner_id: str, registry: Registry):
    banner = registry.guide_banners.find_by_id(banner_id)
    if banner is None:
        raise _not_found(banner_id)
    return ok(banner)


@router.put("/{banner_id}", dependencies=WRITE_GUARDS)
async def replace_guide_banner(banner_id: str, registry: Registry, payload: Annotated[Any, Body()]):
    banner = registry.guide_banners.replace_banner(banner_id, payload)
    if banner is None:
        raise _not_found(banner_id)
    return ok(banner)


@router.patch("/{banner_id}", dependencies=WRITE_GUARDS)
async def update_guide_banner(banner_id: str, registry: Registry, payload: Annotated[Any, Body()]):
    banner = registry.guide_banners.update(banner_id, payload)
    if banner is None:
        raise _not_found(banner_id)
    return ok(banner)


@router.delete("/{banner_id}", dependencies=WRITE_GUARDS)
async def delete_guide_banner(banner_id: str, registry: Registry):
    if not registry.guide_banners.remove(banner_id):
        raise _not_found(banner_id)
    return ok({"id": banner_id, "deleted": True})
