"""Tests for the domain stores and their business rules (mock/datasets.py, mock/comments.py)."""

from __future__ import annotations

from collections import Counter

import pytest

from backoffice.core.errors import ConflictError, InvalidPayloadError, NotFoundError, VersionConflictError
from backoffice.mock.registry import build_registry

OWNER = {"ownerType": "company", "ownerId": "company-1", "purpose": "payout"}


@pytest.fixture
def registry():
    return build_registry(seed=99)


# ─── Payment Accounts ─────────────────────────────────────────────────────────


class TestPaymentAccounts:
    def test_first_active_account_becomes_main(self, registry):
        account = registry.payment_accounts.create({**OWNER, "isBackup": True})
        assert account["isActive"] is True
        assert account["isBackup"] is False

    def test_inactive_account_is_forced_to_backup(self, registry):
        registry.payment_accounts.create(OWNER)
        second = registry.payment_accounts.create({**OWNER, "isActive": False, "isBackup": False})
        assert second["isBackup"] is True

    def test_deactivating_via_patch_forces_backup(self, registry):
        registry.payment_accounts.create(OWNER)
        second = registry.payment_accounts.create({**OWNER, "isBackup": True})
        updated = registry.payment_accounts.update(second["id"], {"isActive": False, "isBackup": False})
        assert updated["isBackup"] is True

    def test_cannot_delete_only_active_main(self, registry):
        main = registry.payment_accounts.create(OWNER)
        with pytest.raises(InvalidPayloadError, match="only active main"):
            registry.payment_accounts.remove(main["id"])

    def test_backup_can_be_deleted_and_is_hidden(self, registry):
        registry.payment_accounts.create(OWNER)
        backup = registry.payment_accounts.create({**OWNER, "isBackup": True})

        assert registry.payment_accounts.remove(backup["id"]) is True
        assert registry.payment_accounts.find_by_id(backup["id"]) is None
        assert backup["id"] not in {a["id"] for a in registry.payment_accounts.all()}
        assert registry.payment_accounts.remove(backup["id"]) is False

    @pytest.mark.parametrize("seed", [1, 7, 99, 2024])
    def test_seeded_groups_with_an_active_account_have_a_main(self, seed):
        groups: dict[tuple, list[dict]] = {}
        for account in build_registry(seed=seed).payment_accounts.all():
            groups.setdefault((account["ownerType"], account["ownerId"], account["purpose"]), []).append(account)

        assert any(len(members) > 1 for members in groups.values())
        for members in groups.values():
            assert all(a["isBackup"] for a in members if not a["isActive"])
            if any(a["isActive"] for a in members):
                assert any(a["isActive"] and not a["isBackup"] for a in members)

    def test_null_active_flag_is_rejected(self, registry):
        account = registry.payment_accounts.all()[0]
        with pytest.raises(InvalidPayloadError, match="isActive"):
            registry.payment_accounts.update(account["id"], {"isActive": None})
        assert isinstance(account["isActive"], bool)

    def test_invalid_purpose_rejected(self, registry):
        with pytest.raises(InvalidPayloadError):
            registry.payment_accounts.create({**OWNER, "purpose": "gambling"})


# ─── Guide Banners ────────────────────────────────────────────────────────────


class TestGuideBanners:
    def test_seeded_orders_are_contiguous(self, registry):
        orders = sorted(b["order"] for b in registry.guide_banners.all())
        assert orders == list(range(len(orders)))

    def test_create_appends_after_highest_order(self, registry):
        highest = max(b["order"] for b in registry.guide_banners.all())
        banner = registry.guide_banners.create({"asset": "https://img/x.png"})
        assert banner["order"] == highest + 1

    def test_replace_keeps_id_and_created_at(self, registry):
        original = registry.guide_banners.all()[0]
        replaced = registry.guide_banners.replace_banner(original["id"], {"asset": "https://img/new.png"})
        assert replaced["id"] == original["id"]
        assert replaced["createdAt"] == original["createdAt"]
        assert replaced["asset"] == "https://img/new.png"

    def test_list_filters_active(self, registry):
        active = registry.guide_banners.list_banners(active=True)
        assert active
        assert all(b["active"] for b in active)


# ─── Advertising ──────────────────────────────────────────────────────────────


class TestAdvertising:
    def test_config_shape(self, registry):
        config = registry.advertising_prices.config()
        assert set(config) == {"pricing", "notes", "version"}
        assert len(config["pricing"]) == 6

    def test_price_must_be_numeric(self, registry):
        with pytest.raises(InvalidPayloadError, match="price"):
            registry.advertising_prices.create({"placement": "sidebar", "price": "10"})

    def test_created_price_is_listed_first(self, registry):
        price = registry.advertising_prices.create({"placement": "sidebar", "price": 12})
        assert registry.advertising_prices.config()["pricing"][0] is price

    def test_bulk_update_bumps_version_once(self, registry):
        first, second = registry.advertising_prices.all()[:2]
        version = registry.advertising_prices.version
        config = registry.advertising_prices.bulk_update(
            {"updates": [{"id": first["id"], "active": False}, {"id": second["id"], "price": 3}]}
        )
        assert config["version"] == version + 1
        assert first["active"] is False
        assert second["price"] == 3
        assert first["updatedAt"] == second["updatedAt"]

    def test_bulk_update_rejects_null_price(self, registry):
        price = registry.advertising_prices.all()[0]
        with pytest.raises(InvalidPayloadError, match="price"):
            registry.advertising_prices.bulk_update({"updates": [{"id": price["id"], "price": None}]})
        assert isinstance(price["price"], float | int)

    def test_ads_query_hides_deleted_by_default(self, registry):
        ad = registry.advertisements.all()[0]
        registry.advertisements.soft_delete(ad["id"])

        visible = registry.advertisements.query()
        assert ad["id"] not in {a["id"] for a in visible}
        assert ad["id"] in {a["id"] for a in registry.advertisements.query(with_deleted=True)}

        registry.advertisements.restore(ad["id"])
        assert ad["id"] in {a["id"] for a in registry.advertisements.query()}

    def test_ads_query_filters_status(self, registry):
        ads = registry.advertisements.query(status=["active", "paused"])
        assert all(a["status"] in ("active", "paused") for a in ads)

    def test_overview_counts_every_status(self, registry):
        overview = registry.advertisements.overview()
        assert overview["totalAds"] == 120
        assert sum(s["count"] for s in overview["statusStats"]) == 120

    def test_reject_action_sets_reason(self, registry):
        ad = registry.advertisements.all()[0]
        updated = registry.advertisements.perform_action(ad["id"], {"action": "reject", "reason": "blurry"})
        assert updated["status"] == "rejected"
        assert updated["reason"] == "blurry"

    def test_unknown_action_rejected(self, registry):
        ad = registry.advertisements.all()[0]
        with pytest.raises(InvalidPayloadError):
            registry.advertisements.perform_action(ad["id"], {"action": "explode"})


# ─── Chats & Password Requests ────────────────────────────────────────────────


def test_mark_read_is_idempotent(registry):
    message = registry.chat_messages.all()[0]
    first = registry.chat_messages.mark_read(message["id"])
    second = registry.chat_messages.mark_read(message["id"])
    assert first["isRead"] is True
    assert second["isRead"] is True
    assert registry.chat_messages.mark_read("missing") is None


class TestPasswordRequests:
    REVIEWER = {"id": "admin-1", "name": "Ada", "email": "ada@example.com"}

    def _pending(self, registry):
        return next(r for r in registry.password_requests.all() if r["status"] == "pending")

    def test_stats_sum_to_total(self, registry):
        stats = registry.password_requests.stats()
        assert stats["total"] == 87
        assert sum(stats[s] for s in ("pending", "approved", "rejected", "expired")) == 87

    def test_approve_pending(self, registry):
        request = self._pending(registry)
        approved = registry.password_requests.approve(request["id"], self.REVIEWER)
        assert approved["status"] == "approved"
        assert approved["reviewer"]["reviewedById"] == "admin-1"

    def test_second_review_conflicts(self, registry):
        request = self._pending(registry)
        registry.password_requests.approve(request["id"], self.REVIEWER)
        with pytest.raises(ConflictError):
            registry.password_requests.reject(request["id"], {"reason": "late"}, self.REVIEWER)

    def test_reject_requires_reason(self, registry):
        request = self._pending(registry)
        with pytest.raises(InvalidPayloadError):
            registry.password_requests.reject(request["id"], {}, self.REVIEWER)
        assert registry.password_requests.find_by_id(request["id"])["status"] == "pending"

    def test_search_filters_status(self, registry):
        results = registry.password_requests.search(status="pending")
        assert results
        assert all(r["status"] == "pending" for r in results)

    def test_oldest_sort(self, registry):
        results = registry.password_requests.search(sort="oldest")
        created = [r["createdAt"] for r in results]
        assert created == sorted(created)


# ─── Guide Subscriptions ──────────────────────────────────────────────────────


class TestGuideSubscriptions:
    TIER = {"key": "weekend_pass", "title": "Weekend Pass", "price": 2.5, "billingCycleDays": [2]}

    def test_seeded_tiers(self, registry):
        document = registry.guide_subscriptions.document()
        assert [t["key"] for t in document["guideSubscriptions"]] == [
            "basic_monthly",
            "pro_monthly",
            "enterprise_yearly",
        ]
        assert document["version"] == 1

    def test_find_by_id_or_key(self, registry):
        tier = registry.guide_subscriptions.find("pro_monthly")
        assert registry.guide_subscriptions.find(tier["_id"]) is tier
        assert registry.guide_subscriptions.find("missing") is None

    def test_upsert_matches_on_key(self, registry):
        created, was_created = registry.guide_subscriptions.upsert_tier(self.TIER)
        replaced, was_created_again = registry.guide_subscriptions.upsert_tier({**self.TIER, "title": "Weekend"})
        assert (was_created, was_created_again) == (True, False)
        assert replaced["_id"] == created["_id"]
        assert replaced["createdAt"] == created["createdAt"]
        assert replaced["order"] == created["order"] == 3

    def test_writes_refresh_version_and_timestamp(self, registry):
        before = registry.guide_subscriptions.document()
        registry.guide_subscriptions.upsert_tier({**self.TIER, "version": before["version"]})
        after = registry.guide_subscriptions.document()
        assert after["version"] == before["version"] + 1
        assert after["updatedAt"] >= before["updatedAt"]

    def test_stale_version_raises_and_changes_nothing(self, registry):
        version = registry.guide_subscriptions.version
        with pytest.raises(VersionConflictError):
            registry.guide_subscriptions.upsert_tier({**self.TIER, "version": version + 5})
        with pytest.raises(VersionConflictError):
            registry.guide_subscriptions.delete_tier("basic_monthly", version - 1)
        assert registry.guide_subscriptions.version == version
        assert len(registry.guide_subscriptions) == 3

    def test_search_by_perk_is_case_insensitive(self, registry):
        perk = registry.guide_subscriptions.find("basic_monthly")["perks"][0]
        found = registry.guide_subscriptions.document(search=perk.upper())["guideSubscriptions"]
        assert "basic_monthly" in [t["key"] for t in found]

    def test_reorder_with_only_unknown_ids_still_bumps(self, registry):
        keys = [t["key"] for t in registry.guide_subscriptions.all()]
        version = registry.guide_subscriptions.version
        document = registry.guide_subscriptions.reorder_tiers({"orderedIds": ["nope"]})
        assert [t["key"] for t in document["guideSubscriptions"]] == keys
        assert document["version"] == version + 1


# ─── Article Comments ─────────────────────────────────────────────────────────


class TestArticleComments:
    def test_seed_shape(self, registry):
        comments = registry.article_comments
        assert len(comments.articles()) == 35
        replies = Counter(c["parentId"] for c in comments.all() if c["parentId"] is not None)
        for root in (c for c in comments.all() if c["parentId"] is None):
            assert replies[root["id"]] == root["replyCount"]

    def test_metrics_add_up(self, registry):
        article = registry.article_comments.articles()[0]
        metrics = registry.article_comments.metrics(article["id"])
        assert metrics["totalComments"] >= 8
        assert metrics["totalComments"] == sum(
            metrics[key] for key in ("approvedComments", "pendingComments", "rejectedComments")
        )

    def test_summaries_status_filter(self, registry):
        rows = registry.article_comments.summaries(status="pending")
        assert all(row["metrics"]["pendingComments"] > 0 for row in rows)

    def test_summaries_search_on_title(self, registry):
        title = registry.article_comments.articles()[3]["title"]
        rows = registry.article_comments.summaries(search=title.upper())
        assert title in [row["article"]["title"] for row in rows]

    def test_thread_has_replies_filter(self, registry):
        article = registry.article_comments.articles()[0]
        window = registry.article_comments.thread(article["id"], has_replies=False, page_size=100)
        assert all(c["replyCount"] == 0 for c in window.items)

    def test_unknown_article_raises(self, registry):
        with pytest.raises(NotFoundError):
            registry.article_comments.thread("missing")

    def test_parent_from_another_article_raises(self, registry):
        first, second = registry.article_comments.articles()[:2]
        root = next(c for c in registry.article_comments.all() if c["articleId"] == second["id"])
        with pytest.raises(NotFoundError):
            registry.article_comments.thread(first["id"], root["id"])

    def test_reset_reseeds_articles(self, registry):
        before = [a["id"] for a in registry.article_comments.articles()]
        registry.article_comments.reset()
        assert len(registry.article_comments.articles()) == 35
        assert [a["id"] for a in registry.article_comments.articles()] != before
