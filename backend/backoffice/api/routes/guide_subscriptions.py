"""guide_subscriptions.py — Subscription tiers offered to guides.

The tiers are one settings document with a version. Writes may send that
version back; a stale one is a 409 ``VERSION_CONFLICT``.

Called by: main.py
Depends on: api/deps.py, mock/datasets.py (GuideSubscriptionStore)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Body, Depends, Query

from backoffice.api.deps import WRITE_GUARDS, Registry, simulate_latency
from backoffice.api.envelope import created, ok
from backoffice.core.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/mock/site-settings/guide-subscriptions",
    tags=["guide-subscriptions"],
    dependencies=[Depends(simulate_latency)],
)


def _not_found(id_or_key: str) -> NotFoundError:
    return NotFoundError(f"Subscription tier '{id_or_key}' not found")


@router.get("")
async def get_guide_subscriptions(
    registry: Registry,
    only_active: Annotated[bool, Query(alias="onlyActive")] = False,
    search: Annotated[str | None, Query()] = None,
    sort_by: Annotated[Literal["price", "title", "createdAt"] | None, Query(alias="sortBy")] = None,
    sort_dir: Annotated[Literal["asc", "desc"], Query(alias="sortDir")] = "asc",
):
    """Return ``{guideSubscriptions, version, updatedAt}``."""
    return ok(registry.guide_subscriptions.document(only_active, search, sort_by, sort_dir))


@router.put("", dependencies=WRITE_GUARDS)
async def upsert_guide_subscription(registry: Registry, payload: Annotated[Any, Body()]):
    """Create a tier (201) or replace the one sharing its key or ``_id`` (200)."""
    tier, was_created = registry.guide_subscriptions.upsert_tier(payload)
    logger.debug("Mock: PUT /mock/site-settings/guide-subscriptions → %s", tier["key"])
    return created(tier) if was_created else ok(tier)


@router.post("/reorder", dependencies=WRITE_GUARDS)
async def reorder_guide_subscriptions(registry: Registry, payload: Annotated[Any, Body()]):
    return ok(registry.guide_subscriptions.reorder_tiers(payload))


@router.get("/{id_or_key}")
async def get_guide_subscription(id_or_key: str, registry: Registry):
    tier = registry.guide_subscriptions.find(id_or_key)
    if tier is None:
        raise _not_found(id_or_key)
    return ok(tier)


@router.delete("/{id_or_key}", dependencies=WRITE_GUARDS)
async def delete_guide_subscription(
    id_or_key: str,
    registry: Registry,
    version: Annotated[int | None, Query()] = None,
):
    if not registry.guide_subscriptions.delete_tier(id_or_key, version):
        raise _not_found(id_or_key)
    return ok({"id": id_or_key, "deleted": True, "version": registry.guide_subscriptions.version})
