"""chats.py — Support chat inbox."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import WRITE_GUARDS, PageParams, Registry, simulate_latency
from backoffice.api.envelope import ok
from backoffice.core.errors import NotFoundError
from backoffice.mock.pagination import paginate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mock/chats", tags=["chats"], dependencies=[Depends(simulate_latency)])


@router.get("")
async def list_messages(
    registry: Registry,
    page_params: PageParams,
    is_read: Annotated[bool | None, Query(alias="isRead")] = None,
    search: Annotated[str | None, Query()] = None,
):
    items = registry.chat_messages.list(
        exact={"isRead": is_read},
        contains={"message": search} if search else None,
        sort_by="createdAt",
        sort_dir="desc",
    )
    return ok(paginate(items, *page_params))


@router.post("/{message_id}/read", dependencies=WRITE_GUARDS)
async def mark_message_read(message_id: str, registry: Registry):
    """Mark a message read. Repeating the call succeeds with the same result."""
    message = registry.chat_messages.mark_read(message_id)
    if message is None:
        raise NotFoundError(f"Message '{message_id}' not found")
    logger.debug("Mock: POST /mock/chats/%s/read", message_id)
    return ok(message)
