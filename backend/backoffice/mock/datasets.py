"""datasets.py — Stateful mock collections with their domain rules.

Each store here is a ``MockStore`` seeded from the fixture generator, plus
whatever rules the real back-office enforces for that entity (main/backup
payment accounts, soft deletes, request status transitions).

Called by: mock/registry.py, api/routes/*
Depends on: mock/store.py, mock/fixtures.py, models/schemas.py
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from backoffice.core.errors import ConflictError, InvalidPayloadError, VersionConflictError
from backoffice.mock.fixtures import AD_STATUSES, PASSWORD_REQUEST_STATUSES, FixtureGenerator, RecordKind, now_iso
from backoffice.mock.pagination import sort_items
from backoffice.mock.store import Entity, MockStore, validate_payload
from backoffice.models.schemas import (
    AdAdminAction,
    AdvertisingPriceCreate,
    AdvertisingPriceUpdate,
    BulkPriceUpdatePayload,
    GuideBannerCreate,
    GuideBannerUpdate,
    PasswordRequestReject,
    PaymentAccountCreate,
    PaymentAccountUpdate,
    SubscriptionTierInput,
    TierReorderPayload,
)

logger = logging.getLogger(__name__)

# Seed sizes match the admin frontend's mocks.
PAYMENT_ACCOUNT_SEED = 12
GUIDE_BANNER_SEED = 8
ADVERTISING_PRICE_SEED = 6
ADVERTISEMENT_SEED = 120
CHAT_MESSAGE_SEED = 50
PASSWORD_REQUEST_SEED = 87


# ─── Payment Accounts ─────────────────────────────────────────────────────────


class PaymentAccountStore(MockStore):
    """Payment accounts with main/backup rules and soft delete.

    Rules (per owner + purpose):
        - The first active account is always main (``isBackup=False``).
        - Inactive accounts are always backups.
        - The only active main account cannot be deleted.
    """

    def __init__(self, generator: FixtureGenerator) -> None:
        super().__init__(
            "payment_accounts",
            seeder=lambda: self._seed(generator),
            id_factory=generator.object_id,
            create_schema=PaymentAccountCreate,
            update_schema=PaymentAccountUpdate,
        )

    def all(self) -> list[Entity]:
        return [a for a in super().all() if not a.get("isDeleted")]

    def find_by_id(self, entity_id: str) -> Entity | None:
        account = super().find_by_id(entity_id)
        if account is None or account.get("isDeleted"):
            return None
        return account

    def _seed(self, generator: FixtureGenerator) -> list[Entity]:
        """Seed accounts in pairs sharing an owner and purpose, then settle main/backup in creation order."""
        accounts = generator.generate(RecordKind.PAYMENT_ACCOUNT, PAYMENT_ACCOUNT_SEED)
        for first, second in zip(accounts[::2], accounts[1::2]):
            second.update(ownerType=first["ownerType"], ownerId=first["ownerId"], purpose=first["purpose"])
        accounts.sort(key=lambda a: a["createdAt"])
        settled: list[Entity] = []
        for account in accounts:
            settled.append(self._enforce_main_backup(account, settled))
        return settled

    def _other_active_main(self, account: Entity, pool: list[Entity] | None = None) -> Entity | None:
        return next(
            (
                other
                for other in (self.all() if pool is None else pool)
                if other["id"] != account.get("id")
                and other.get("ownerType") == account.get("ownerType")
                and other.get("ownerId") == account.get("ownerId")
                and other.get("purpose") == account.get("purpose")
                and other.get("isActive")
                and not other.get("isBackup")
            ),
            None,
        )

    def _enforce_main_backup(self, account: Entity, pool: list[Entity] | None = None) -> Entity:
        if not account.get("isActive"):
            account["isBackup"] = True
        elif self._other_active_main(account, pool) is None:
            account["isBackup"] = False
        return account

    def build_entity(self, data: dict[str, Any]) -> Entity:
        account = super().build_entity(data)
        account.update(provider="stripe", isDeleted=False, deletedAt=None)
        return self._enforce_main_backup(account)

    def apply_patch(self, entity: Entity, patch: dict[str, Any]) -> Entity:
        entity.update(patch)
        return self._enforce_main_backup(entity)

    def remove(self, entity_id: str) -> bool:
        """Soft delete.

        Raises:
            InvalidPayloadError: Deleting the only active main account.
        """
        account = self.find_by_id(entity_id)
        if account is None:
            return False
        if account.get("isActive") and not account.get("isBackup") and self._other_active_main(account) is None:
            raise InvalidPayloadError("Cannot delete the only active main payment account")
        account["isDeleted"] = True
        account["deletedAt"] = account["updatedAt"] = now_iso()
        self._bump()
        logger.info("payment_account_deleted id=%s", entity_id)
        return True


# ─── Guide Banners ────────────────────────────────────────────────────────────


class GuideBannerStore(MockStore):
    def __init__(self, generator: FixtureGenerator) -> None:
        super().__init__(
            "guide_banners",
            seeder=lambda: self._seed(generator),
            id_factory=generator.object_id,
            create_schema=GuideBannerCreate,
            update_schema=GuideBannerUpdate,
        )

    @staticmethod
    def _seed(generator: FixtureGenerator) -> list[Entity]:
        banners = generator.generate(RecordKind.GUIDE_BANNER, GUIDE_BANNER_SEED)
        for i, banner in enumerate(banners):
            banner.update(order=i, active=i % 2 == 0, alt=f"Banner {i + 1}")
        return banners

    def build_entity(self, data: dict[str, Any]) -> Entity:
        if data.get("order") is None:
            data["order"] = max((b.get("order") or 0 for b in self.all()), default=-1) + 1
        return super().build_entity(data)

    def list_banners(self, active: bool | None = None, search: str | None = None,
                     sort_by: str | None = None, sort_dir: str = "asc") -> list[Entity]:
        return self.list(
            exact={"active": active},
            contains={"caption|alt": search} if search else None,
            sort_by=sort_by or "order",
            sort_dir=sort_dir,
        )

    def replace_banner(self, entity_id: str, payload: Any) -> Entity | None:
        if self.find_by_id(entity_id) is None:
            return None
        data = validate_payload(GuideBannerCreate, payload).model_dump(by_alias=True)
        if data.get("order") is None:
            data["order"] = self.find_by_id(entity_id).get("order", 0)
        return self.replace(entity_id, data)


# ─── Advertising Prices ───────────────────────────────────────────────────────


class AdvertisingPriceStore(MockStore):
    """Per-placement advertising prices, exposed as one config document.

    New prices are listed first in ``pricing``.
    """

    notes = "Mock advertising config for local development"
    insert_first = True

    def __init__(self, generator: FixtureGenerator) -> None:
        super().__init__(
            "advertising_prices",
            seeder=lambda: generator.generate(RecordKind.ADVERTISING_PRICE, ADVERTISING_PRICE_SEED),
            id_factory=generator.object_id,
            create_schema=AdvertisingPriceCreate,
            update_schema=AdvertisingPriceUpdate,
        )

    def config(self) -> dict[str, Any]:
        return {"pricing": self.all(), "notes": self.notes, "version": self.version}

    def bulk_update(self, payload: Any) -> dict[str, Any]:
        """Apply ``{updates: [...], removeIds: [...]}`` as one change.

        Unknown ids in either list are skipped. Every touched price gets the
        same ``updatedAt`` and the version is bumped once.

        Returns:
            The config document after the change.
        """
        data = validate_payload(BulkPriceUpdatePayload, payload)
        items = self.ensure_dataset()
        now = now_iso()
        updated = 0
        for change in data.updates:
            price = items.get(change.id)
            if price is None:
                continue
            patch = change.model_dump(by_alias=True, exclude_unset=True)
            patch.pop("id", None)
            self.apply_patch(price, patch)
            price["updatedAt"] = now
            updated += 1
        removed = sum(items.pop(price_id, None) is not None for price_id in data.remove_ids)
        self._bump()
        logger.info("advertising_prices_bulk_updated updated=%d removed=%d", updated, removed)
        return self.config()


# ─── Advertisements ───────────────────────────────────────────────────────────

_ACTION_STATUS = {
    "approve": "active",
    "reject": "rejected",
    "pause": "paused",
    "resume": "active",
    "expire": "expired",
    "cancel": "cancelled",
}


class AdvertisementStore(MockStore):
    def __init__(self, generator: FixtureGenerator) -> None:
        super().__init__(
            "advertisements",
            seeder=lambda: generator.generate(RecordKind.ADVERTISEMENT, ADVERTISEMENT_SEED),
            id_factory=generator.uuid,
        )

    def query(
        self,
        q: str | None = None,
        status: list[str] | None = None,
        placement: list[str] | None = None,
        guide_id: str | None = None,
        with_deleted: bool = False,
        sort_by: str = "createdAt",
        sort_dir: str = "desc",
    ) -> list[Entity]:
        items = self.list(exact={"guideId": guide_id}, contains={"title|guideName": q} if q else None)
        if not with_deleted:
            items = [ad for ad in items if not ad["isDeleted"]]
        if status:
            items = [ad for ad in items if ad["status"] in status]
        if placement:
            items = [ad for ad in items if any(p in ad["placements"] for p in placement)]
        return sort_items(items, sort_by, sort_dir)

    def overview(self) -> dict[str, Any]:
        live = [ad for ad in self.all() if not ad["isDeleted"]]
        by_status = Counter(ad["status"] for ad in live)
        by_placement = Counter(p for ad in live for p in ad["placements"])
        impressions = sum(ad["impressions"] for ad in live)
        clicks = sum(ad["clicks"] for ad in live)
        return {
            "totalAds": len(self.all()),
            "statusStats": [{"status": s, "count": by_status.get(s, 0)} for s in AD_STATUSES],
            "topPlacements": [{"placement": p, "count": c} for p, c in by_placement.most_common(5)],
            "impressionsTotal": impressions,
            "clicksTotal": clicks,
            "averageCTR": round(clicks / impressions, 4) if impressions else None,
        }

    def perform_action(self, entity_id: str, payload: Any) -> Entity | None:
        ad = self.find_by_id(entity_id)
        if ad is None:
            return None
        action = validate_payload(AdAdminAction, payload)
        ad["status"] = _ACTION_STATUS[action.action]
        if action.action == "reject":
            ad["reason"] = action.reason or "rejected by admin"
        elif action.action == "approve":
            ad["reason"] = None
            if action.end_at is not None:
                ad["endAt"] = action.end_at
        elif action.action == "expire":
            ad["endAt"] = action.end_at or now_iso()
        ad["updatedAt"] = now_iso()
        self._bump()
        logger.info("advertisement_action id=%s action=%s", entity_id, action.action)
        return ad

    def soft_delete(self, entity_id: str, deleted_by: str = "admin:system") -> Entity | None:
        ad = self.find_by_id(entity_id)
        if ad is None:
            return None
        ad.update(isDeleted=True, deletedAt=now_iso(), deletedBy=deleted_by, updatedAt=now_iso())
        self._bump()
        return ad

    def restore(self, entity_id: str) -> Entity | None:
        ad = self.find_by_id(entity_id)
        if ad is None:
            return None
        ad.update(isDeleted=False, deletedAt=None, deletedBy=None, updatedAt=now_iso())
        self._bump()
        return ad


# ─── Chat Messages ────────────────────────────────────────────────────────────


class ChatMessageStore(MockStore):
    def __init__(self, generator: FixtureGenerator) -> None:
        super().__init__(
            "chat_messages",
            seeder=lambda: generator.generate(RecordKind.CHAT_MESSAGE, CHAT_MESSAGE_SEED),
            id_factory=generator.object_id,
        )

    def mark_read(self, entity_id: str) -> Entity | None:
        """Set ``isRead``; marking an already-read message is a no-op success."""
        message = self.find_by_id(entity_id)
        if message is None:
            return None
        message["isRead"] = True
        message["updatedAt"] = now_iso()
        self._bump()
        return message


# ─── Reset-Password Requests ──────────────────────────────────────────────────

PASSWORD_REQUEST_SORTS: dict[str, tuple[str, str]] = {
    "newest": ("createdAt", "desc"),
    "oldest": ("createdAt", "asc"),
    "expiring": ("expiresAt", "asc"),
    "updated": ("updatedAt", "desc"),
}


class PasswordRequestStore(MockStore):
    """Guide password-reset requests awaiting admin review."""

    def __init__(self, generator: FixtureGenerator) -> None:
        super().__init__(
            "password_requests",
            seeder=lambda: sort_items(
                generator.generate(RecordKind.RESET_PASSWORD_REQUEST, PASSWORD_REQUEST_SEED),
                "createdAt",
                "desc",
            ),
            id_factory=generator.uuid,
        )

    def search(self, status: str | None = None, search: str | None = None, sort: str = "newest") -> list[Entity]:
        items = self.list(exact={"status": status})
        if search:
            term = search.lower()
            items = [
                r for r in items
                if term in r["user"]["name"].lower()
                or term in r["user"]["email"].lower()
                or term in r["reason"].lower()
            ]
        sort_by, sort_dir = PASSWORD_REQUEST_SORTS.get(sort, PASSWORD_REQUEST_SORTS["newest"])
        return sort_items(items, sort_by, sort_dir)

    def stats(self) -> dict[str, int]:
        counts = Counter(r["status"] for r in self.all())
        return {"total": len(self), **{status: counts.get(status, 0) for status in PASSWORD_REQUEST_STATUSES}}

    def _review(self, entity_id: str, status: str, reviewer: dict[str, Any]) -> Entity | None:
        request = self.find_by_id(entity_id)
        if request is None:
            return None
        if request["status"] != "pending":
            raise ConflictError(f"Request is already {request['status']}")
        request["status"] = status
        request["reviewer"] = {
            "reviewedById": str(reviewer.get("id")),
            "reviewerName": reviewer.get("name"),
            "reviewerEmail": reviewer.get("email"),
        }
        request["updatedAt"] = now_iso()
        self._bump()
        logger.info("password_request_reviewed id=%s status=%s", entity_id, status)
        return request

    def approve(self, entity_id: str, reviewer: dict[str, Any]) -> Entity | None:
        return self._review(entity_id, "approved", reviewer)

    def reject(self, entity_id: str, payload: Any, reviewer: dict[str, Any]) -> Entity | None:
        if self.find_by_id(entity_id) is None:
            return None
        data = validate_payload(PasswordRequestReject, payload)
        request = self._review(entity_id, "rejected", reviewer)
        request["rejectionReason"] = data.reason
        return request


# ─── Guide Subscription Tiers ─────────────────────────────────────────────────

# Plans the guide settings page ships with.
DEFAULT_TIERS = (
    {"key": "basic_monthly", "title": "Basic (Monthly)", "price": 4.99, "billingCycleDays": [30], "active": True},
    {"key": "pro_monthly", "title": "Pro (Monthly)", "price": 14.99, "billingCycleDays": [30], "active": True},
    {"key": "enterprise_yearly", "title": "Enterprise (Yearly)", "price": 199.0, "billingCycleDays": [365], "active": False},
)


class GuideSubscriptionStore(MockStore):
    """Guide subscription tiers, served as one versioned settings document.

    Tiers are addressed by ``_id`` or by ``key``. Writes accept an optional
    client ``version``; a stale one is a 409 so two editors cannot silently
    overwrite each other.
    """

    def __init__(self, generator: FixtureGenerator) -> None:
        super().__init__(
            "guide_subscriptions",
            seeder=lambda: [
                {**generator.subscription_tier(), **tier, "order": position}
                for position, tier in enumerate(DEFAULT_TIERS)
            ],
            id_factory=generator.object_id,
            id_field="_id",
        )
        self.updated_at = now_iso()

    def _bump(self) -> None:
        super()._bump()
        self.updated_at = now_iso()

    def reset(self) -> None:
        super().reset()
        self.updated_at = now_iso()

    def _check_version(self, client_version: int | None) -> None:
        if client_version is not None and client_version != self.version:
            raise VersionConflictError(client_version, self.version)

    def find(self, id_or_key: str) -> Entity | None:
        return next((t for t in self.all() if id_or_key in (t["_id"], t["key"])), None)

    def document(
        self,
        only_active: bool = False,
        search: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "asc",
    ) -> dict[str, Any]:
        """``{guideSubscriptions, version, updatedAt}``, filtered and sorted.

        ``search`` matches title, key and perks; a term containing a digit
        also matches price and billing cycles.
        """
        tiers = self.list(exact={"active": True if only_active else None})
        term = (search or "").strip().lower()
        if term:
            def matches(tier: Entity) -> bool:
                fields = [tier["title"], tier["key"], *tier["perks"]]
                if any(ch.isdigit() for ch in term):
                    fields += [str(tier["price"]), *(str(d) for d in tier["billingCycleDays"])]
                return any(term in str(f).lower() for f in fields)

            tiers = [t for t in tiers if matches(t)]
        if sort_by:
            key = (lambda t: t["title"].lower()) if sort_by == "title" else None
            tiers = sort_items(tiers, sort_by, sort_dir, key=key)
        return {"guideSubscriptions": tiers, "version": self.version, "updatedAt": self.updated_at}

    def upsert_tier(self, payload: Any) -> tuple[Entity, bool]:
        """Create a tier or replace the one with the same key or ``_id``.

        Returns:
            ``(tier, created)``.

        Raises:
            InvalidPayloadError: Invalid tier fields.
            VersionConflictError: ``version`` was sent and is stale.
        """
        data = validate_payload(SubscriptionTierInput, payload)
        self._check_version(data.version)
        existing = next(
            (t for t in self.all() if t["key"] == data.key or (data.id is not None and t["_id"] == data.id)),
            None,
        )
        tier = data.model_dump(by_alias=True, exclude={"version", "id"})
        if existing is not None:
            return self.replace(existing["_id"], {**tier, "order": existing.get("order")}), False

        now = now_iso()
        tier = {
            "_id": data.id or self._id_factory(),
            **tier,
            "order": len(self.ensure_dataset()),
            "createdAt": now,
            "updatedAt": now,
        }
        self.ensure_dataset()[tier["_id"]] = tier
        self._bump()
        logger.info("subscription_tier_created key=%s", tier["key"])
        return tier, True

    def delete_tier(self, id_or_key: str, client_version: int | None = None) -> bool:
        self._check_version(client_version)
        tier = self.find(id_or_key)
        if tier is None:
            return False
        return self.remove(tier["_id"])

    def reorder_tiers(self, payload: Any) -> dict[str, Any]:
        """Reorder by ``_id`` or key; unmentioned tiers keep their order after the mentioned ones."""
        data = validate_payload(TierReorderPayload, payload)
        self._check_version(data.version)
        ids = [tier["_id"] for tier in map(self.find, data.ordered_ids) if tier is not None]
        if data.ordered_ids and not ids:
            # Nothing recognised: keep the order, still count it as a write.
            self._bump()
        else:
            self.reorder(ids)
        return self.document()
