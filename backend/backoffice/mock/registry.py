"""registry.py — Container for every stateful mock store.

One ``MockRegistry`` lives on ``app.state`` for the lifetime of the process.
Tests build their own so each test sees freshly seeded data.

Called by: main.py (lifespan), api/deps.py
Depends on: mock/comments.py, mock/datasets.py, mock/enums.py, mock/fixtures.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from backoffice.mock.comments import ArticleCommentStore
from backoffice.mock.datasets import (
    AdvertisementStore,
    AdvertisingPriceStore,
    ChatMessageStore,
    GuideBannerStore,
    GuideSubscriptionStore,
    PasswordRequestStore,
    PaymentAccountStore,
)
from backoffice.mock.enums import EnumGroupStore
from backoffice.mock.fixtures import FixtureGenerator

logger = logging.getLogger(__name__)

# Groups the admin UI expects to exist on first load.
SEEDED_ENUM_GROUPS = ("ad_placements", "tour_categories", "booking_statuses", "languages")


@dataclass
class MockRegistry:
    generator: FixtureGenerator
    payment_accounts: PaymentAccountStore
    enums: EnumGroupStore
    guide_banners: GuideBannerStore
    advertising_prices: AdvertisingPriceStore
    advertisements: AdvertisementStore
    chat_messages: ChatMessageStore
    password_requests: PasswordRequestStore
    guide_subscriptions: GuideSubscriptionStore
    article_comments: ArticleCommentStore
    seed: int | None = field(default=None)

    def stores(self) -> list:
        return [
            self.payment_accounts,
            self.enums,
            self.guide_banners,
            self.advertising_prices,
            self.advertisements,
            self.chat_messages,
            self.password_requests,
            self.guide_subscriptions,
            self.article_comments,
        ]

    def reset(self) -> None:
        """Drop every dataset; each reseeds on next access."""
        for store in self.stores():
            store.reset()
        logger.info("mock_registry_reset seed=%s", self.seed)


def build_registry(seed: int | None = None) -> MockRegistry:
    """Wire every store to one fixture generator.

    Args:
        seed: Optional seed. The same seed gives the same seed data.
    """
    generator = FixtureGenerator(seed)
    return MockRegistry(
        generator=generator,
        payment_accounts=PaymentAccountStore(generator),
        enums=EnumGroupStore(lambda: [generator.enum_group(name) for name in SEEDED_ENUM_GROUPS]),
        guide_banners=GuideBannerStore(generator),
        advertising_prices=AdvertisingPriceStore(generator),
        advertisements=AdvertisementStore(generator),
        chat_messages=ChatMessageStore(generator),
        password_requests=PasswordRequestStore(generator),
        guide_subscriptions=GuideSubscriptionStore(generator),
        article_comments=ArticleCommentStore(generator),
        seed=seed,
    )
