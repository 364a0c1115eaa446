"""dashboard.py — Overview dashboard widgets served from fresh fixtures.

Nothing here is stateful: every request draws new records from a
``FixtureGenerator`` (pinned with ``?seed=`` or MOCK_SEED).

Called by: main.py
Depends on: api/deps.py, mock/fixtures.py, mock/pagination.py
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import Fixtures, simulate_latency
from backoffice.api.envelope import ok
from backoffice.mock.fixtures import DEFAULT_COUNTS, RecordKind
from backoffice.mock.pagination import paginate, parse_page_params

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mock/dashboard", tags=["dashboard"], dependencies=[Depends(simulate_latency)])

MAX_COUNT = 100


class Widget(StrEnum):
    STATS = "stats"
    RECENT_ACTIVITY = "recent-activity"
    PENDING_ACTIONS = "pending-actions"
    RECENT_BOOKINGS = "recent-bookings"
    ROLE_DISTRIBUTION = "role-distribution"
    ANNOUNCEMENTS = "announcements"
    ADMIN_NOTIFICATIONS = "admin-notifications"
    ANALYTICS = "analytics"
    SYSTEM_HEALTH = "system-health"
    TRENDING_INSIGHTS = "trending-insights"
    SOCIAL_LINKS = "social-links"


# Widgets that render a single object.
OBJECT_WIDGETS: dict[Widget, RecordKind] = {
    Widget.STATS: RecordKind.DASHBOARD_STATS,
    Widget.ROLE_DISTRIBUTION: RecordKind.ROLE_DISTRIBUTION,
    Widget.ANALYTICS: RecordKind.ANALYTICS,
    Widget.SYSTEM_HEALTH: RecordKind.SYSTEM_HEALTH,
}

# Widgets that render a list; served as a Page.
LIST_WIDGETS: dict[Widget, RecordKind] = {
    Widget.RECENT_ACTIVITY: RecordKind.RECENT_ACTIVITY,
    Widget.PENDING_ACTIONS: RecordKind.PENDING_ACTION,
    Widget.RECENT_BOOKINGS: RecordKind.BOOKING,
    Widget.ANNOUNCEMENTS: RecordKind.ANNOUNCEMENT,
    Widget.ADMIN_NOTIFICATIONS: RecordKind.ADMIN_NOTIFICATION,
    Widget.TRENDING_INSIGHTS: RecordKind.TRENDING_INSIGHT,
    Widget.SOCIAL_LINKS: RecordKind.SOCIAL_LINK,
}


@router.get("/{widget}")
async def get_widget(
    widget: Widget,
    fixtures: Fixtures,
    count: Annotated[int | None, Query(ge=0, le=MAX_COUNT)] = None,
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
):
    """Return one dashboard widget.

    List widgets accept ``count`` (records generated, default per widget)
    and ``page`` / ``limit`` to page through them.
    """
    if widget in OBJECT_WIDGETS:
        logger.debug("Mock: GET /mock/dashboard/%s → object", widget.value)
        return ok(fixtures.one(OBJECT_WIDGETS[widget]))

    kind = LIST_WIDGETS[widget]
    items = fixtures.generate(kind, count if count is not None else DEFAULT_COUNTS[kind])
    page_number, page_size = parse_page_params(page, limit, default_page_size=max(len(items), 1))
    logger.debug("Mock: GET /mock/dashboard/%s → %d items", widget.value, len(items))
    return ok(paginate(items, page_number, page_size))
