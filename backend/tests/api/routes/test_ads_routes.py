"""Tests for advertisement moderation routes."""

from __future__ import annotations

import pytest


@pytest.mark.anyio
async def test_list_ads_paginated(client):
    data = (await client.get("/mock/advertising/ads?pageSize=10")).json()["data"]
    assert data["total"] == 120
    assert data["totalPages"] == 12
    assert len(data["items"]) == 10


@pytest.mark.anyio
async def test_list_ads_status_filter_accepts_csv(client):
    data = (await client.get("/mock/advertising/ads?status=active,paused&pageSize=200")).json()["data"]
    assert data["items"]
    assert {ad["status"] for ad in data["items"]} <= {"active", "paused"}


@pytest.mark.anyio
async def test_list_ads_sorted_by_price(client):
    items = (await client.get("/mock/advertising/ads?sortBy=price&sortDir=asc&pageSize=50")).json()["data"]["items"]
    prices = [ad["price"] for ad in items]
    assert prices == sorted(prices)


@pytest.mark.anyio
async def test_overview(client):
    data = (await client.get("/mock/advertising/ads/overview")).json()["data"]
    assert data["totalAds"] == 120
    assert {"statusStats", "topPlacements", "impressionsTotal", "clicksTotal", "averageCTR"} <= set(data)


@pytest.mark.anyio
async def test_soft_delete_and_restore(client, registry):
    ad_id = registry.advertisements.all()[0]["id"]

    deleted = (await client.delete(f"/mock/advertising/ads/{ad_id}")).json()["data"]
    assert deleted["isDeleted"] is True
    assert deleted["deletedBy"] == "admin:mock-admin"

    visible = (await client.get("/mock/advertising/ads?pageSize=200")).json()["data"]
    assert visible["total"] == 119

    restored = (await client.post(f"/mock/advertising/ads/{ad_id}/restore")).json()["data"]
    assert restored["isDeleted"] is False


@pytest.mark.anyio
async def test_admin_action(client, registry):
    ad_id = registry.advertisements.all()[0]["id"]
    response = await client.post(f"/mock/advertising/ads/{ad_id}/actions", json={"action": "pause"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "paused"


@pytest.mark.anyio
async def test_action_on_missing_ad(client):
    response = await client.post("/mock/advertising/ads/nope/actions", json={"action": "approve"})
    assert response.status_code == 404
