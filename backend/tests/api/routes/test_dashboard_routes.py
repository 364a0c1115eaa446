"""Tests for dashboard, statistics and company overview routes."""

from __future__ import annotations

import pytest


@pytest.mark.anyio
@pytest.mark.parametrize(
    "widget",
    ["stats", "role-distribution", "analytics", "system-health"],
)
async def test_object_widgets(client, widget):
    response = await client.get(f"/mock/dashboard/{widget}")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert isinstance(body["data"], dict)


@pytest.mark.anyio
async def test_list_widget_is_paged(client):
    response = await client.get("/mock/dashboard/recent-bookings?count=12&page=2&limit=5")
    data = response.json()["data"]
    assert data["total"] == 12
    assert data["page"] == 2
    assert data["pageSize"] == 5
    assert data["totalPages"] == 3
    assert len(data["items"]) == 5


@pytest.mark.anyio
async def test_list_widget_defaults_to_one_page(client):
    data = (await client.get("/mock/dashboard/announcements")).json()["data"]
    assert data["totalPages"] == 1
    assert len(data["items"]) == data["total"]


@pytest.mark.anyio
async def test_trending_insights_ranges(client):
    data = (await client.get("/mock/dashboard/trending-insights?count=100&limit=100")).json()["data"]
    for insight in data["items"]:
        assert 1 <= insight["percentage"] <= 100
        assert 0.5 <= insight["confidence"] <= 0.99


@pytest.mark.anyio
async def test_seed_makes_widget_deterministic(client):
    first = (await client.get("/mock/dashboard/stats?seed=11")).json()
    second = (await client.get("/mock/dashboard/stats?seed=11")).json()
    assert first == second


@pytest.mark.anyio
async def test_unknown_widget_is_400(client):
    response = await client.get("/mock/dashboard/weather")
    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.anyio
async def test_zero_limit_is_rejected(client):
    response = await client.get("/mock/dashboard/recent-activity?limit=0")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PAGE_SIZE"


# ─── Statistics ───────────────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_kpis(client):
    data = (await client.get("/mock/statistics/kpis")).json()["data"]
    assert {"totalUsers", "totalTours", "totalBookings", "avgRating"} <= set(data)


@pytest.mark.anyio
async def test_statistics_date_range(client):
    response = await client.get("/mock/statistics/users?from=2024-03-01&to=2024-03-07")
    series = response.json()["data"]["signupsOverTime"]
    assert series[0]["date"] == "2024-03-01"
    assert len(series) == 7


@pytest.mark.anyio
async def test_statistics_inverted_range_is_400(client):
    response = await client.get("/mock/statistics/chat?from=2024-03-10&to=2024-03-01")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PAYLOAD"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "kind",
    ["tours", "reviews", "reports", "images", "notifications", "chat", "employees"],
)
async def test_every_statistics_kind(client, kind):
    response = await client.get(f"/mock/statistics/{kind}")
    assert response.status_code == 200
    assert response.json()["success"] is True


# ─── Companies ────────────────────────────────────────────────────────────────


@pytest.mark.anyio
async def test_company_overview_is_stable_per_id(client):
    first = (await client.get("/mock/users/companies/abc123/overview")).json()["data"]
    second = (await client.get("/mock/users/companies/abc123/overview")).json()["data"]

    assert first["id"] == "abc123"
    assert first == second


@pytest.mark.anyio
async def test_company_employees_page(client):
    response = await client.get("/mock/users/companies/abc123/employees")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["companyId"] == "abc123"
    assert data["total"] == 200
    assert data["pageSize"] == 10
    assert len(data["items"]) == 10
    assert all(e["companyId"] == "abc123" for e in data["items"])
    created = [e["createdAt"] for e in data["items"]]
    assert created == sorted(created, reverse=True)


@pytest.mark.anyio
async def test_company_employees_sorted_by_name(client):
    data = (
        await client.get("/mock/users/companies/abc123/employees?sortBy=user.name&sortOrder=asc&limit=50")
    ).json()["data"]
    names = [e["user"]["name"].lower() for e in data["items"]]
    assert names == sorted(names)


@pytest.mark.anyio
async def test_company_employees_search(client):
    everyone = (await client.get("/mock/users/companies/abc123/employees?limit=200")).json()["data"]["items"]
    target = everyone[17]["user"]["email"]

    found = (await client.get("/mock/users/companies/abc123/employees", params={"search": target.upper()})).json()
    assert target in [e["user"]["email"] for e in found["data"]["items"]]
    assert found["data"]["total"] < 200


@pytest.mark.anyio
async def test_company_employees_bad_limit(client):
    response = await client.get("/mock/users/companies/abc123/employees?limit=0")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PAGE_SIZE"
