"""statistics.py — Statistics page datasets (KPIs and per-area charts).

Time-series charts emit one point per day of ``?from=&to=`` (ISO dates),
defaulting to the last 30 days.

Called by: main.py
Depends on: api/deps.py, mock/fixtures.py
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import Fixtures, simulate_latency
from backoffice.api.envelope import ok
from backoffice.core.errors import InvalidPayloadError
from backoffice.mock.fixtures import DATE_RANGED_KINDS, RecordKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mock/statistics", tags=["statistics"], dependencies=[Depends(simulate_latency)])

# Longest range a client may request, in days.
MAX_RANGE_DAYS = 366


class StatisticsKind(StrEnum):
    KPIS = "kpis"
    USERS = "users"
    TOURS = "tours"
    REVIEWS = "reviews"
    REPORTS = "reports"
    IMAGES = "images"
    NOTIFICATIONS = "notifications"
    CHAT = "chat"
    EMPLOYEES = "employees"


RECORD_KINDS: dict[StatisticsKind, RecordKind] = {
    StatisticsKind.KPIS: RecordKind.KPI_METRICS,
    StatisticsKind.USERS: RecordKind.USERS_STATS,
    StatisticsKind.TOURS: RecordKind.TOURS_STATS,
    StatisticsKind.REVIEWS: RecordKind.REVIEWS_STATS,
    StatisticsKind.REPORTS: RecordKind.REPORTS_STATS,
    StatisticsKind.IMAGES: RecordKind.IMAGES_STATS,
    StatisticsKind.NOTIFICATIONS: RecordKind.NOTIFICATIONS_STATS,
    StatisticsKind.CHAT: RecordKind.CHAT_STATS,
    StatisticsKind.EMPLOYEES: RecordKind.EMPLOYEES_STATS,
}


@router.get("/{kind}")
async def get_statistics(
    kind: StatisticsKind,
    fixtures: Fixtures,
    date_from: Annotated[date | None, Query(alias="from")] = None,
    date_to: Annotated[date | None, Query(alias="to")] = None,
):
    record_kind = RECORD_KINDS[kind]
    if record_kind not in DATE_RANGED_KINDS:
        return ok(fixtures.one(record_kind))

    end = date_to or datetime.now(UTC).date()
    start = date_from or end
    if start > end:
        raise InvalidPayloadError("'from' must not be after 'to'")
    if (end - start).days > MAX_RANGE_DAYS:
        raise InvalidPayloadError(f"Date range cannot exceed {MAX_RANGE_DAYS} days")

    builder = getattr(fixtures, record_kind.value)
    logger.debug("Mock: GET /mock/statistics/%s from=%s to=%s", kind.value, date_from, date_to)
    return ok(builder(date_from, date_to))
