"""enums.py — Site-settings enum groups (placements, categories, ...).

Group names and value keys arrive URL-encoded; Starlette decodes them
before they reach the handlers. ``value_key`` uses the ``path`` converter
so a key containing an encoded ``/`` still routes.

Called by: main.py
Depends on: api/deps.py, mock/enums.py (EnumGroupStore)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from backoffice.api.deps import WRITE_GUARDS, Registry, simulate_latency
from backoffice.api.envelope import created, ok
from backoffice.core.errors import GroupNotFoundError
from backoffice.mock.fixtures import now_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mock/site-settings/enums", tags=["enums"], dependencies=[Depends(simulate_latency)])


@router.get("")
async def list_enum_groups(registry: Registry):
    return ok({"enums": registry.enums.all(), "fetchedAt": now_iso()})


@router.post("", dependencies=WRITE_GUARDS)
async def create_enum_group(registry: Registry, payload: Annotated[Any, Body()]):
    """Create a group. 409 if the name is taken."""
    group = registry.enums.create_group(payload)
    return created({"enumGroup": group})


@router.get("/{name}")
async def get_enum_group(name: str, registry: Registry):
    group = registry.enums.get(name)
    if group is None:
        raise GroupNotFoundError(name)
    return ok({"enumGroup": group})


@router.put("/{name}", dependencies=WRITE_GUARDS)
async def update_enum_group(name: str, registry: Registry, payload: Annotated[Any, Body()]):
    return ok({"enumGroup": registry.enums.update_group(name, payload)})


@router.delete("/{name}", dependencies=WRITE_GUARDS)
async def delete_enum_group(name: str, registry: Registry):
    if not registry.enums.delete_group(name):
        raise GroupNotFoundError(name)
    logger.debug("Mock: DELETE /mock/site-settings/enums/%s", name)
    return ok({"name": name, "deleted": True})


@router.post("/{name}/values", dependencies=WRITE_GUARDS)
async def upsert_enum_values(name: str, registry: Registry, payload: Annotated[Any, Body()]):
    """Merge values by key, or swap the whole list with ``replace: true``."""
    return ok({"enumGroup": registry.enums.upsert_values(name, payload)})


@router.delete("/{name}/values/{value_key:path}", dependencies=WRITE_GUARDS)
async def delete_enum_value(name: str, value_key: str, registry: Registry):
    """Remove one value.

    Missing group and missing key are both 404 but carry different codes
    (``GROUP_NOT_FOUND`` / ``VALUE_NOT_FOUND``).
    """
    group = registry.enums.remove_value_from_group(name, value_key)
    return ok({"enumGroup": group})
