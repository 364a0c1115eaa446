"""Pydantic v2 schemas for mock API request bodies.

Wire format is camelCase (the admin frontend's convention); Python code
uses snake_case attributes. ``model_dump(by_alias=True)`` gives the wire
shape back.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Placement = Literal["landing_banner", "popup_modal", "email", "sidebar", "sponsored_list"]
PositiveInt = Annotated[int, Field(gt=0)]
# Strict: "10" and True are not prices.
Price = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Enum Groups ───────────────────────────────────────────────────────────────


class EnumValueInput(CamelModel):
    key: str = Field(..., min_length=1, max_length=100)
    label: str | None = None
    value: str | int | float | None = None
    description: str | None = None
    order: int | None = None
    active: bool | None = None


class EnumValuePatch(CamelModel):
    key: str = Field(..., min_length=1, max_length=100)
    label: str | None = None
    value: str | int | float | None = None
    description: str | None = None
    order: int | None = None
    active: bool | None = None


def _unique_keys(values: list[EnumValueInput]) -> list[EnumValueInput]:
    seen: set[str] = set()
    for value in values:
        if value.key in seen:
            raise ValueError(f"duplicate value key '{value.key}'")
        seen.add(value.key)
    return values


def _not_null(value):
    # Omittable in a patch, never null.
    if value is None:
        raise ValueError("cannot be null")
    return value


class CreateEnumGroupPayload(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_\-]+$")
    description: str | None = None
    values: list[EnumValueInput] = Field(default_factory=list)

    _check_keys = field_validator("values")(_unique_keys)


class UpdateEnumGroupPayload(CamelModel):
    description: str | None = None
    values: list[EnumValuePatch] = Field(default_factory=list)


class UpsertEnumValuesPayload(CamelModel):
    values: list[EnumValueInput] = Field(..., min_length=1)
    replace: bool = False

    _check_keys = field_validator("values")(_unique_keys)


# ─── Guide Banners ─────────────────────────────────────────────────────────────


class GuideBannerCreate(CamelModel):
    asset: str = Field(..., min_length=1)
    alt: str | None = None
    caption: str | None = None
    order: int | None = Field(default=None, ge=0)
    active: bool = True


class GuideBannerUpdate(CamelModel):
    asset: str | None = Field(default=None, min_length=1)
    alt: str | None = None
    caption: str | None = None
    order: int | None = Field(default=None, ge=0)
    active: bool | None = None

    _no_nulls = field_validator("asset", "order", "active", mode="before")(_not_null)


class ReorderPayload(CamelModel):
    # Emptiness is checked by the store so it can raise EmptyOrderListError.
    ordered_ids: list[str]


# ─── Advertising ───────────────────────────────────────────────────────────────


class AdvertisingPriceCreate(CamelModel):
    placement: Placement
    price: Price
    currency: str = Field(default="USD", min_length=3, max_length=3)
    default_duration_days: PositiveInt | None = None
    allowed_durations_days: list[PositiveInt] = Field(default_factory=list)
    active: bool = True


class AdvertisingPriceUpdate(CamelModel):
    placement: Placement | None = None
    price: Price | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    default_duration_days: PositiveInt | None = None
    allowed_durations_days: list[PositiveInt] | None = None
    active: bool | None = None

    _no_nulls = field_validator("placement", "price", "currency", "allowed_durations_days", "active", mode="before")(
        _not_null
    )


class AdvertisingPriceBulkItem(AdvertisingPriceUpdate):
    id: str = Field(..., min_length=1)


class BulkPriceUpdatePayload(CamelModel):
    updates: list[AdvertisingPriceBulkItem] = Field(default_factory=list)
    remove_ids: list[str] = Field(default_factory=list)


class AdAdminAction(CamelModel):
    action: Literal["approve", "reject", "pause", "resume", "expire", "cancel"]
    reason: str | None = None
    end_at: str | None = None


# ─── Payment Accounts ──────────────────────────────────────────────────────────


class CardInfo(CamelModel):
    brand: Literal["visa", "mastercard", "amex", "discover"]
    last4: str = Field(..., pattern=r"^\d{4}$")
    exp_month: int = Field(..., ge=1, le=12)
    exp_year: int = Field(..., ge=2000)


class PaymentAccountCreate(CamelModel):
    owner_type: Literal["platform", "company", "guide"]
    owner_id: str | None = None
    purpose: Literal["payout", "subscription", "advertising"]
    label: str | None = Field(default=None, max_length=120)
    is_active: bool = True
    is_backup: bool = False
    card: CardInfo | None = None


class PaymentAccountUpdate(CamelModel):
    owner_id: str | None = None
    label: str | None = Field(default=None, max_length=120)
    is_active: bool | None = None
    is_backup: bool | None = None

    _no_nulls = field_validator("is_active", "is_backup", mode="before")(_not_null)


# ─── Support ───────────────────────────────────────────────────────────────────


class PasswordRequestReject(CamelModel):
    reason: str = Field(..., min_length=1, max_length=500)


# ─── Guide Subscription Tiers ──────────────────────────────────────────────────


class SubscriptionTierInput(CamelModel):
    """One tier as sent by the settings editor; ``key`` or ``_id`` picks the tier to replace."""

    id: str | None = Field(default=None, alias="_id")
    key: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_\-]+$")
    title: str = Field(..., min_length=1, max_length=120)
    price: Price
    currency: str = Field(default="USD", min_length=3, max_length=3)
    billing_cycle_days: list[PositiveInt] = Field(..., min_length=1)
    perks: list[str] = Field(default_factory=list)
    active: bool = True
    # Optimistic lock: when sent, must equal the current settings version.
    version: int | None = None

    @field_validator("key", "title", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class TierReorderPayload(CamelModel):
    ordered_ids: list[str]
    version: int | None = None
