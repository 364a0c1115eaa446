"""Tests for the name-keyed enum group store (mock/enums.py)."""

from __future__ import annotations

import pytest

from backoffice.core.errors import ConflictError, GroupNotFoundError, InvalidPayloadError, ValueNotFoundError
from backoffice.mock.enums import EnumGroupStore


def _seed():
    return [
        {
            "name": "ad_placements",
            "description": "Where ads can appear",
            "values": [
                {"key": "sidebar", "value": "sidebar", "label": "Sidebar", "description": None, "order": 0, "active": True},
                {"key": "email", "value": "email", "label": "Email", "description": None, "order": 1, "active": True},
            ],
            "version": 1,
        }
    ]


@pytest.fixture
def store() -> EnumGroupStore:
    return EnumGroupStore(_seed)


def test_get_missing_group_returns_none(store):
    assert store.get("nope") is None


def test_create_group_defaults(store):
    group = store.create_group({"name": "languages", "values": [{"key": "en"}, {"key": "bn", "label": "Bangla"}]})
    assert group["version"] == 1
    assert [v["order"] for v in group["values"]] == [0, 1]
    assert group["values"][0]["value"] == "en"
    assert all(v["active"] for v in group["values"])
    assert store.get("languages") is group


def test_create_duplicate_name_conflicts(store):
    with pytest.raises(ConflictError):
        store.create_group({"name": "ad_placements"})


def test_create_duplicate_value_keys_rejected(store):
    with pytest.raises(InvalidPayloadError):
        store.create_group({"name": "dupes", "values": [{"key": "a"}, {"key": "a"}]})


def test_create_invalid_name_rejected(store):
    with pytest.raises(InvalidPayloadError):
        store.create_group({"name": "has spaces"})


def test_update_merges_by_key_and_bumps_version(store):
    group = store.update_group("ad_placements", {"values": [{"key": "email", "active": False}, {"key": "popup"}]})
    by_key = {v["key"]: v for v in group["values"]}
    assert by_key["email"]["active"] is False
    assert by_key["email"]["label"] == "Email"
    assert "popup" in by_key
    assert group["version"] == 2
    assert group["description"] == "Where ads can appear"


def test_update_missing_group(store):
    with pytest.raises(GroupNotFoundError):
        store.update_group("nope", {"description": "x"})


def test_upsert_replace_swaps_values(store):
    group = store.upsert_values("ad_placements", {"values": [{"key": "landing_banner"}], "replace": True})
    assert [v["key"] for v in group["values"]] == ["landing_banner"]


def test_upsert_creates_missing_group(store):
    group = store.upsert_values("currencies", {"values": [{"key": "USD"}]})
    assert store.get("currencies") is group


def test_remove_value_distinguishes_missing_group_and_key(store):
    with pytest.raises(GroupNotFoundError) as group_exc:
        store.remove_value_from_group("nope", "sidebar")
    with pytest.raises(ValueNotFoundError) as value_exc:
        store.remove_value_from_group("ad_placements", "nope")

    assert group_exc.value.status_code == value_exc.value.status_code == 404
    assert group_exc.value.code != value_exc.value.code
    assert group_exc.value.message != value_exc.value.message


def test_remove_value(store):
    group = store.remove_value_from_group("ad_placements", "sidebar")
    assert [v["key"] for v in group["values"]] == ["email"]


def test_delete_group(store):
    assert store.delete_group("ad_placements") is True
    assert store.delete_group("ad_placements") is False
