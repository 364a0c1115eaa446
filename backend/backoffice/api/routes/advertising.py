"""advertising.py — Advertising price config (site settings).

Called by: main.py
Depends on: api/deps.py, mock/datasets.py (AdvertisingPriceStore)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from backoffice.api.deps import WRITE_GUARDS, Registry, simulate_latency
from backoffice.api.envelope import created, ok
from backoffice.core.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/mock/site-settings/advertising",
    tags=["advertising"],
    dependencies=[Depends(simulate_latency)],
)


def _not_found(price_id: str) -> NotFoundError:
    return NotFoundError(f"Advertising price '{price_id}' not found")


@router.get("")
async def get_advertising_config(registry: Registry):
    """Return ``{pricing, notes, version}``."""
    return ok(registry.advertising_prices.config())


@router.post("/prices", dependencies=WRITE_GUARDS)
async def create_advertising_price(registry: Registry, payload: Annotated[Any, Body()]):
    """Create a price row.

    ``placement`` must be a known placement and ``price`` a non-negative
    number; anything else is a 400.
    """
    price = registry.advertising_prices.create(payload)
    logger.debug("Mock: POST /mock/site-settings/advertising/prices → %s", price["id"])
    return created(price)


@router.patch("/prices/{price_id}", dependencies=WRITE_GUARDS)
async def update_advertising_price(price_id: str, registry: Registry, payload: Annotated[Any, Body()]):
    price = registry.advertising_prices.update(price_id, payload)
    if price is None:
        raise _not_found(price_id)
    return ok(price)


@router.delete("/prices/{price_id}", dependencies=WRITE_GUARDS)
async def delete_advertising_price(price_id: str, registry: Registry):
    if not registry.advertising_prices.remove(price_id):
        raise _not_found(price_id)
    return ok({"id": price_id, "deleted": True})


@router.post("/prices/bulk", dependencies=WRITE_GUARDS)
async def bulk_update_advertising_prices(registry: Registry, payload: Annotated[Any, Body()]):
    """Apply ``{updates: [{id, ...patch}], removeIds: [...]}`` as one write.

    Unknown ids are skipped. Returns the whole config with a single version bump.
    """
    return ok(registry.advertising_prices.bulk_update(payload))
