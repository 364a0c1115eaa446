"""payment_accounts.py — Site-settings payment accounts (main/backup cards).

Called by: main.py
Depends on: api/deps.py, mock/datasets.py (PaymentAccountStore)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query

from backoffice.api.deps import WRITE_GUARDS, PageParams, Registry, simulate_latency
from backoffice.api.envelope import created, ok
from backoffice.core.errors import NotFoundError
from backoffice.mock.pagination import paginate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/mock/site-settings/payment-accounts",
    tags=["payment-accounts"],
    dependencies=[Depends(simulate_latency)],
)


def _not_found(account_id: str) -> NotFoundError:
    return NotFoundError(f"Payment account '{account_id}' not found")


@router.get("")
async def list_payment_accounts(
    registry: Registry,
    page_params: PageParams,
    purpose: Annotated[str | None, Query()] = None,
    owner_type: Annotated[str | None, Query(alias="ownerType")] = None,
    owner_id: Annotated[str | None, Query(alias="ownerId")] = None,
    is_active: Annotated[bool | None, Query(alias="isActive")] = None,
):
    """Page through non-deleted accounts, newest first."""
    items = registry.payment_accounts.list(
        exact={"purpose": purpose, "ownerType": owner_type, "ownerId": owner_id, "isActive": is_active},
        sort_by="createdAt",
        sort_dir="desc",
    )
    return ok(paginate(items, *page_params))


@router.get("/{account_id}")
async def get_payment_account(account_id: str, registry: Registry):
    account = registry.payment_accounts.find_by_id(account_id)
    if account is None:
        raise _not_found(account_id)
    return ok(account)


@router.post("", dependencies=WRITE_GUARDS)
async def create_payment_account(registry: Registry, payload: Annotated[Any, Body()]):
    account = registry.payment_accounts.create(payload)
    logger.debug("Mock: POST /mock/site-settings/payment-accounts → %s", account["id"])
    return created(account)


@router.patch("/{account_id}", dependencies=WRITE_GUARDS)
async def update_payment_account(account_id: str, registry: Registry, payload: Annotated[Any, Body()]):
    account = registry.payment_accounts.update(account_id, payload)
    if account is None:
        raise _not_found(account_id)
    return ok(account)


@router.delete("/{account_id}", dependencies=WRITE_GUARDS)
async def delete_payment_account(account_id: str, registry: Registry):
    """Soft delete. The only active main account of an owner cannot go."""
    if not registry.payment_accounts.remove(account_id):
        raise _not_found(account_id)
    return ok({"id": account_id, "deleted": True})
