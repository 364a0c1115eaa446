"""Tests for the fixture generator (mock/fixtures.py)."""

from __future__ import annotations

import pytest

from backoffice.mock.fixtures import (
    BOOKING_STATUSES,
    DEFAULT_COUNTS,
    PLACEMENTS,
    FixtureGenerator,
    RecordKind,
)


def test_trending_insight_ranges_hold_over_many_records():
    """percentage is an int in [1, 100]; confidence a float in [0.5, 0.99]."""
    insights = FixtureGenerator().generate(RecordKind.TRENDING_INSIGHT, 1000)

    assert len(insights) == 1000
    for insight in insights:
        assert isinstance(insight["percentage"], int)
        assert 1 <= insight["percentage"] <= 100
        assert 0.5 <= insight["confidence"] <= 0.99


def test_same_seed_same_records():
    first = FixtureGenerator(seed=42).generate(RecordKind.BOOKING, 5)
    second = FixtureGenerator(seed=42).generate(RecordKind.BOOKING, 5)
    assert first == second


def test_unseeded_generators_differ():
    first = FixtureGenerator().generate(RecordKind.ADVERTISEMENT, 3)
    second = FixtureGenerator().generate(RecordKind.ADVERTISEMENT, 3)
    assert [a["id"] for a in first] != [a["id"] for a in second]


def test_default_counts_apply():
    records = FixtureGenerator(seed=1).generate(RecordKind.RECENT_ACTIVITY)
    assert len(records) == DEFAULT_COUNTS[RecordKind.RECENT_ACTIVITY]


def test_zero_count_is_empty():
    assert FixtureGenerator().generate(RecordKind.BOOKING, 0) == []


def test_negative_count_raises():
    with pytest.raises(ValueError):
        FixtureGenerator().generate(RecordKind.BOOKING, -1)


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        FixtureGenerator().generate("not_a_kind", 1)


def test_booking_fields_are_populated():
    for booking in FixtureGenerator(seed=7).generate(RecordKind.BOOKING, 50):
        assert booking["status"] in BOOKING_STATUSES
        assert booking["guests"] >= 1
        assert booking["amount"] > 0
        assert all(value is not None for value in booking.values())


def test_role_distribution_percentages_are_bounded():
    roles = FixtureGenerator().one(RecordKind.ROLE_DISTRIBUTION)["roles"]
    assert all(1 <= role["percentage"] <= 100 for role in roles)


def test_advertisement_ctr_matches_counts():
    for ad in FixtureGenerator(seed=3).generate(RecordKind.ADVERTISEMENT, 100):
        assert ad["clicks"] <= ad["impressions"]
        assert set(ad["placements"]) <= set(PLACEMENTS)
        if ad["impressions"]:
            assert ad["ctr"] == round(ad["clicks"] / ad["impressions"], 4)
        else:
            assert ad["ctr"] is None


def test_date_range_emits_one_point_per_day():
    from datetime import date

    stats = FixtureGenerator(seed=5).users_stats(date(2024, 1, 1), date(2024, 1, 10))
    dates = [point["date"] for point in stats["signupsOverTime"]]
    assert dates[0] == "2024-01-01"
    assert dates[-1] == "2024-01-10"
    assert len(dates) == 10


def test_default_window_is_exactly_thirty_days():
    generator = FixtureGenerator(seed=5)
    series = generator.day_series(1, 10)
    assert len(series) == 30
    assert series[-1]["date"] == generator.anchor.date().isoformat()
    assert len(generator.day_series(1, 10, days=14)) == 14


def test_enum_group_value_keys_are_unique():
    group = FixtureGenerator(seed=9).enum_group("tour_categories", count=6)
    keys = [value["key"] for value in group["values"]]
    assert group["name"] == "tour_categories"
    assert len(keys) == len(set(keys)) == 6
