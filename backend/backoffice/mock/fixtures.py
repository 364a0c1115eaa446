"""fixtures.py — Randomized, schema-shaped records for every dashboard widget.

Each record kind has one builder that draws every field from a declared
range or enumeration. Builders never return ``None`` for a field unless the
field is optional on the wire.

Determinism:
    - ``FixtureGenerator(seed=...)`` seeds both Faker and the ``random``
      stream, so two generators with the same seed produce identical output.
    - Without a seed every call produces fresh values.
    - Timestamps are drawn relative to ``anchor``: midnight UTC when
      seeded, the current instant otherwise.

Called by: mock/comments.py, mock/datasets.py, mock/registry.py, api/routes/companies.py, api/routes/dashboard.py, api/routes/statistics.py
Depends on: faker
"""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from enum import StrEnum
from typing import Any

from faker import Faker

# ─── Record Kinds ─────────────────────────────────────────────────────────────


class RecordKind(StrEnum):
    BOOKING = "booking"
    ADMIN_NOTIFICATION = "admin_notification"
    ANNOUNCEMENT = "announcement"
    PENDING_ACTION = "pending_action"
    RECENT_ACTIVITY = "recent_activity"
    TRENDING_INSIGHT = "trending_insight"
    SOCIAL_LINK = "social_link"
    DASHBOARD_STATS = "dashboard_stats"
    SYSTEM_HEALTH = "system_health"
    ROLE_DISTRIBUTION = "role_distribution"
    ANALYTICS = "analytics"
    KPI_METRICS = "kpi_metrics"
    USERS_STATS = "users_stats"
    TOURS_STATS = "tours_stats"
    REVIEWS_STATS = "reviews_stats"
    REPORTS_STATS = "reports_stats"
    IMAGES_STATS = "images_stats"
    NOTIFICATIONS_STATS = "notifications_stats"
    CHAT_STATS = "chat_stats"
    EMPLOYEES_STATS = "employees_stats"
    COMPANY_OVERVIEW = "company_overview"
    EMPLOYEE = "employee"
    PAYMENT_ACCOUNT = "payment_account"
    ENUM_GROUP = "enum_group"
    RESET_PASSWORD_REQUEST = "reset_password_request"
    CHAT_MESSAGE = "chat_message"
    GUIDE_BANNER = "guide_banner"
    ADVERTISING_PRICE = "advertising_price"
    ADVERTISEMENT = "advertisement"
    SUBSCRIPTION_TIER = "subscription_tier"
    ARTICLE = "article"


# ─── Enumerations ─────────────────────────────────────────────────────────────

PLACEMENTS = ("landing_banner", "popup_modal", "email", "sidebar", "sponsored_list")
AD_STATUSES = ("draft", "pending", "active", "paused", "expired", "cancelled", "rejected")
BOOKING_STATUSES = ("confirmed", "pending", "cancelled", "completed", "refunded")
USER_ROLES = ("traveler", "guide", "admin", "support")
PRIORITIES = ("low", "medium", "high")
PASSWORD_REQUEST_STATUSES = ("pending", "approved", "rejected", "expired")
PAYMENT_PURPOSES = ("payout", "subscription", "advertising")
PAYMENT_OWNER_TYPES = ("platform", "company", "guide")
CARD_BRANDS = ("visa", "mastercard", "amex", "discover")
CURRENCIES = ("USD", "EUR", "BDT")
SOCIAL_PLATFORMS = ("facebook", "instagram", "x", "youtube", "linkedin", "tiktok")
INSIGHT_CATEGORIES = ("destination", "booking", "review", "pricing", "season")
TREND_DIRECTIONS = ("up", "down", "stable")
EMPLOYEE_STATUSES = ("active", "onLeave", "suspended", "terminated")
EMPLOYMENT_TYPES = ("full_time", "part_time", "contract", "intern")
SALARY_PAYMENT_MODES = ("bank_transfer", "mobile_banking", "cash")
COMMENT_STATUSES = ("pending", "approved", "rejected")
TIER_PERKS = (
    "Priority support",
    "Early access to new content",
    "Downloadable guide PDFs",
    "Offline maps",
    "Ad-free experience",
    "Exclusive discounts",
)

_STATUS_TONES = {"active": "positive", "onLeave": "warning"}

# Default record count per list kind. Object-shaped kinds produce one record.
DEFAULT_COUNTS: dict[RecordKind, int] = {
    RecordKind.BOOKING: 10,
    RecordKind.ADMIN_NOTIFICATION: 8,
    RecordKind.ANNOUNCEMENT: 5,
    RecordKind.PENDING_ACTION: 6,
    RecordKind.RECENT_ACTIVITY: 15,
    RecordKind.TRENDING_INSIGHT: 5,
    RecordKind.SOCIAL_LINK: 4,
    RecordKind.PAYMENT_ACCOUNT: 12,
    RecordKind.ENUM_GROUP: 3,
    RecordKind.RESET_PASSWORD_REQUEST: 30,
    RecordKind.CHAT_MESSAGE: 20,
    RecordKind.GUIDE_BANNER: 8,
    RecordKind.ADVERTISING_PRICE: 6,
    RecordKind.ADVERTISEMENT: 20,
}


def iso(dt: datetime) -> str:
    """Format a datetime as ISO 8601 string."""
    return dt.isoformat()


def now_iso() -> str:
    return iso(datetime.now(UTC))


class FixtureGenerator:
    """Builds fixture records from a private Faker/random stream.

    Args:
        seed: Optional seed. Same seed → same sequence of records.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self.faker = Faker()
        self.rng = random.Random(seed)
        now = datetime.now(UTC)
        # Seeded output is stable for a whole UTC day, not just one instant.
        self.anchor = now.replace(hour=0, minute=0, second=0, microsecond=0) if seed is not None else now
        if seed is not None:
            self.faker.seed_instance(seed)
        self._builders: dict[RecordKind, Callable[[], dict[str, Any]]] = {
            RecordKind.BOOKING: self.booking,
            RecordKind.ADMIN_NOTIFICATION: self.admin_notification,
            RecordKind.ANNOUNCEMENT: self.announcement,
            RecordKind.PENDING_ACTION: self.pending_action,
            RecordKind.RECENT_ACTIVITY: self.recent_activity,
            RecordKind.TRENDING_INSIGHT: self.trending_insight,
            RecordKind.SOCIAL_LINK: self.social_link,
            RecordKind.DASHBOARD_STATS: self.dashboard_stats,
            RecordKind.SYSTEM_HEALTH: self.system_health,
            RecordKind.ROLE_DISTRIBUTION: self.role_distribution,
            RecordKind.ANALYTICS: self.analytics,
            RecordKind.KPI_METRICS: self.kpi_metrics,
            RecordKind.USERS_STATS: self.users_stats,
            RecordKind.TOURS_STATS: self.tours_stats,
            RecordKind.REVIEWS_STATS: self.reviews_stats,
            RecordKind.REPORTS_STATS: self.reports_stats,
            RecordKind.IMAGES_STATS: self.images_stats,
            RecordKind.NOTIFICATIONS_STATS: self.notifications_stats,
            RecordKind.CHAT_STATS: self.chat_stats,
            RecordKind.EMPLOYEES_STATS: self.employees_stats,
            RecordKind.COMPANY_OVERVIEW: self.company_overview,
            RecordKind.EMPLOYEE: self.employee,
            RecordKind.PAYMENT_ACCOUNT: self.payment_account,
            RecordKind.ENUM_GROUP: self.enum_group,
            RecordKind.RESET_PASSWORD_REQUEST: self.reset_password_request,
            RecordKind.CHAT_MESSAGE: self.chat_message,
            RecordKind.GUIDE_BANNER: self.guide_banner,
            RecordKind.ADVERTISING_PRICE: self.advertising_price,
            RecordKind.ADVERTISEMENT: self.advertisement,
            RecordKind.SUBSCRIPTION_TIER: self.subscription_tier,
            RecordKind.ARTICLE: self.article,
        }

    # ─── Public API ───────────────────────────────────────────────────────────

    def generate(self, kind: RecordKind | str, count: int | None = None) -> list[dict[str, Any]]:
        """Produce ``count`` independent records of ``kind``.

        Raises:
            ValueError: If ``kind`` is not a known record kind or count < 0.
        """
        builder = self._builders[RecordKind(kind)]
        if count is None:
            count = DEFAULT_COUNTS.get(RecordKind(kind), 1)
        if count < 0:
            raise ValueError(f"count must be >= 0 (got {count})")
        return [builder() for _ in range(count)]

    def one(self, kind: RecordKind | str) -> dict[str, Any]:
        return self._builders[RecordKind(kind)]()

    # ─── Primitives ───────────────────────────────────────────────────────────

    def uuid(self) -> str:
        return str(self.faker.uuid4())

    def object_id(self) -> str:
        """24-hex id in the shape the admin frontend expects for DB ids."""
        return self.faker.hexify("^" * 24)

    def int_between(self, low: int, high: int) -> int:
        return self.rng.randint(low, high)

    def float_between(self, low: float, high: float, digits: int = 2) -> float:
        return round(self.rng.uniform(low, high), digits)

    def choice(self, options: tuple[Any, ...] | list[Any]) -> Any:
        return self.rng.choice(options)

    def sample(self, options: tuple[Any, ...] | list[Any], low: int, high: int) -> list[Any]:
        return self.rng.sample(list(options), self.int_between(low, min(high, len(options))))

    def chance(self, probability: float = 0.5) -> bool:
        return self.rng.random() < probability

    def recent(self, days: int = 30) -> datetime:
        """A timestamp within the last ``days`` days."""
        return self.anchor - timedelta(seconds=self.int_between(0, days * 86400))

    def soon(self, days: int = 30) -> datetime:
        return self.anchor + timedelta(seconds=self.int_between(0, days * 86400))

    def between(self, start: datetime, end: datetime) -> datetime:
        if end <= start:
            return start
        span = int((end - start).total_seconds())
        return start + timedelta(seconds=self.int_between(0, span))

    def person(self, role: str | None = None) -> dict[str, Any]:
        person = {
            "id": self.object_id(),
            "name": self.faker.name(),
            "avatar": f"https://i.pravatar.cc/150?u={self.int_between(1, 10_000)}",
        }
        if role:
            person["role"] = role
        return person

    def day_series(
        self,
        low: float,
        high: float,
        date_from: date | None = None,
        date_to: date | None = None,
        days: int = 30,
        digits: int = 0,
    ) -> list[dict[str, Any]]:
        """One ``{date, value}`` point per day of the range (inclusive)."""
        end = date_to or self.anchor.date()
        start = date_from or end - timedelta(days=days - 1)
        points = []
        current = start
        while current <= end:
            value = self.float_between(low, high, digits) if digits else self.int_between(int(low), int(high))
            points.append({"date": current.isoformat(), "value": value})
            current += timedelta(days=1)
        return points

    def distribution(self, labels: tuple[str, ...], low: int, high: int) -> list[dict[str, Any]]:
        """Label counts with integer percentages in [1, 100] of the total."""
        counts = [self.int_between(low, high) for _ in labels]
        total = sum(counts) or 1
        return [
            {
                "label": label,
                "count": count,
                "percentage": min(100, max(1, round(count * 100 / total))),
            }
            for label, count in zip(labels, counts, strict=True)
        ]

    def leaderboard(self, labels: list[str], low: float, high: float, digits: int = 0) -> list[dict[str, Any]]:
        rows = [
            {
                "id": str(i + 1),
                "label": label,
                "value": self.float_between(low, high, digits) if digits else self.int_between(int(low), int(high)),
            }
            for i, label in enumerate(labels)
        ]
        rows.sort(key=lambda row: row["value"], reverse=True)
        return rows

    # ─── Dashboard Widgets ────────────────────────────────────────────────────

    def booking(self) -> dict[str, Any]:
        guests = self.int_between(1, 8)
        unit_price = self.int_between(25, 900)
        return {
            "id": self.object_id(),
            "tourId": self.object_id(),
            "tourTitle": f"{self.faker.city()} {self.choice(['Food Tour', 'Walking Tour', 'Day Trip', 'Night Safari'])}",
            "traveler": self.person("traveler"),
            "guests": guests,
            "amount": guests * unit_price,
            "currency": "USD",
            "status": self.choice(BOOKING_STATUSES),
            "bookedAt": iso(self.recent(30)),
            "travelDate": iso(self.soon(90)),
        }

    def admin_notification(self) -> dict[str, Any]:
        return {
            "id": self.object_id(),
            "title": self.faker.sentence(nb_words=5).rstrip("."),
            "message": self.faker.sentence(nb_words=12),
            "type": self.choice(("info", "warning", "error", "success")),
            "priority": self.choice(PRIORITIES),
            "isRead": self.chance(0.4),
            "createdAt": iso(self.recent(7)),
        }

    def announcement(self) -> dict[str, Any]:
        published = self.recent(30)
        return {
            "id": self.object_id(),
            "title": self.faker.sentence(nb_words=6).rstrip("."),
            "content": self.faker.paragraph(nb_sentences=3),
            "audience": self.choice(("all", "guides", "travelers", "employees")),
            "author": self.person("admin"),
            "pinned": self.chance(0.2),
            "publishedAt": iso(published),
            "expiresAt": iso(published + timedelta(days=self.int_between(7, 60))),
        }

    def pending_action(self) -> dict[str, Any]:
        return {
            "id": self.object_id(),
            "type": self.choice(("guide_application", "tour_review", "report", "refund_request", "password_reset")),
            "title": self.faker.sentence(nb_words=6).rstrip("."),
            "requestedBy": self.person(self.choice(USER_ROLES)),
            "priority": self.choice(PRIORITIES),
            "status": "pending",
            "createdAt": iso(self.recent(14)),
            "dueAt": iso(self.soon(7)),
        }

    def recent_activity(self) -> dict[str, Any]:
        return {
            "id": self.object_id(),
            "actor": self.person(self.choice(USER_ROLES)),
            "action": self.choice(("created", "updated", "deleted", "approved", "rejected", "booked", "reviewed")),
            "target": self.choice(("tour", "article", "company", "booking", "review", "guide")),
            "targetId": self.object_id(),
            "description": self.faker.sentence(nb_words=10),
            "timestamp": iso(self.recent(3)),
        }

    def trending_insight(self) -> dict[str, Any]:
        return {
            "id": self.object_id(),
            "title": f"{self.faker.country()} {self.choice(['bookings', 'searches', 'reviews', 'revenue'])}",
            "description": self.faker.sentence(nb_words=12),
            "category": self.choice(INSIGHT_CATEGORIES),
            "trend": self.choice(TREND_DIRECTIONS),
            "percentage": self.int_between(1, 100),
            "confidence": self.float_between(0.5, 0.99),
            "generatedAt": iso(self.recent(1)),
        }

    def social_link(self) -> dict[str, Any]:
        platform = self.choice(SOCIAL_PLATFORMS)
        handle = self.faker.user_name()
        return {
            "id": self.object_id(),
            "platform": platform,
            "url": f"https://{platform}.com/{handle}",
            "handle": handle,
            "active": self.chance(0.8),
            "order": self.int_between(0, 20),
        }

    def dashboard_stats(self) -> dict[str, Any]:
        return {
            "totalUsers": self.int_between(5_000, 50_000),
            "totalGuides": self.int_between(200, 3_000),
            "totalCompanies": self.int_between(50, 800),
            "totalTours": self.int_between(500, 5_000),
            "totalBookings": self.int_between(2_000, 40_000),
            "totalRevenue": self.int_between(100_000, 2_000_000),
            "monthlyGrowth": self.int_between(1, 100),
            "activeSessions": self.int_between(10, 2_000),
        }

    def system_health(self) -> dict[str, Any]:
        services = ("api", "database", "cache", "storage", "email")
        return {
            "status": self.choice(("healthy", "healthy", "healthy", "degraded")),
            "uptimePercentage": self.float_between(97.0, 99.99),
            "cpuUsage": self.int_between(1, 100),
            "memoryUsage": self.int_between(1, 100),
            "diskUsage": self.int_between(1, 100),
            "services": [
                {
                    "name": name,
                    "status": self.choice(("up", "up", "up", "degraded")),
                    "latencyMs": self.int_between(2, 400),
                }
                for name in services
            ],
            "checkedAt": iso(self.anchor),
        }

    def role_distribution(self) -> dict[str, Any]:
        return {
            "roles": self.distribution(("Travelers", "Guides", "Companies", "Admins", "Support"), 10, 5_000),
        }

    def analytics(self) -> dict[str, Any]:
        return {
            "revenue": self.day_series(1_000, 20_000),
            "bookings": self.day_series(10, 300),
            "visitors": self.day_series(500, 8_000),
            "conversionRate": self.float_between(0.5, 12.0),
        }

    # ─── Statistics ───────────────────────────────────────────────────────────

    def kpi_metrics(self) -> dict[str, Any]:
        return {
            "totalUsers": self.int_between(5_000, 20_000),
            "totalTours": self.int_between(500, 2_000),
            "totalBookings": self.int_between(2_000, 12_000),
            "avgRating": self.float_between(3.5, 5.0, 1),
            "totalImages": self.int_between(10_000, 60_000),
            "openReports": self.int_between(0, 60),
            "totalRevenue": self.int_between(100_000, 1_000_000),
            "activeEmployees": self.int_between(20, 200),
        }

    def users_stats(self, date_from: date | None = None, date_to: date | None = None) -> dict[str, Any]:
        return {
            "signupsOverTime": self.day_series(20, 70, date_from, date_to),
            "statusDistribution": self.distribution(("Active", "Inactive", "Suspended", "Banned"), 100, 9_000),
            "organizerApplications": {
                "pending": self.int_between(0, 80),
                "approved": self.int_between(100, 400),
                "rejected": self.int_between(10, 120),
                "avgReviewTime": self.float_between(0.5, 7.0, 1),
            },
        }

    def tours_stats(self, date_from: date | None = None, date_to: date | None = None) -> dict[str, Any]:
        titles = [f"{self.faker.city()} Tour" for _ in range(5)]
        return {
            "statusCounts": [
                {"label": label, "count": self.int_between(50, 900)}
                for label in ("Published", "Draft", "Archived")
            ],
            "bookingsPerTour": self.leaderboard(titles, 50, 300),
            "ratingLeaderboard": self.leaderboard(titles, 4.0, 5.0, 1),
            "upcomingTours": self.day_series(5, 20, date_from, date_to)[:14],
        }

    def reviews_stats(self, date_from: date | None = None, date_to: date | None = None) -> dict[str, Any]:
        return {
            "volumeOverTime": self.day_series(40, 120, date_from, date_to),
            "avgRatingTrend": self.day_series(4.2, 5.0, date_from, date_to, digits=2),
            "verificationStatus": self.distribution(("Verified", "Unverified"), 1_000, 7_000),
            "helpfulnessDistribution": [
                {"label": label, "count": self.int_between(500, 5_000)}
                for label in ("0-2 helpful votes", "3-10 helpful votes", "11-25 helpful votes", "25+ helpful votes")
            ],
        }

    def reports_stats(self, date_from: date | None = None, date_to: date | None = None) -> dict[str, Any]:
        return {
            "statusFunnel": [
                {"label": label, "count": self.int_between(5, 200)}
                for label in ("Open", "In Review", "Resolved", "Rejected")
            ],
            "reasonsBreakdown": [
                {"label": label, "count": self.int_between(5, 100)}
                for label in ("Inappropriate Content", "Spam", "Safety Concerns", "Pricing Issues", "Other")
            ],
            "resolutionTimes": self.day_series(12, 36, date_from, date_to, days=14),
            "avgResolutionTime": self.float_between(6.0, 36.0, 1),
        }

    def images_stats(self, date_from: date | None = None, date_to: date | None = None) -> dict[str, Any]:
        return {
            "uploadsOverTime": self.day_series(100, 300, date_from, date_to),
            "moderationStatus": self.distribution(("Approved", "Pending", "Rejected"), 500, 40_000),
            "storageProviders": self.distribution(("AWS S3", "Cloudinary", "Google Cloud"), 1_000, 30_000),
            "totalStorage": self.float_between(0.5, 5.0, 1),
        }

    def notifications_stats(self, date_from: date | None = None, date_to: date | None = None) -> dict[str, Any]:
        sent = self.int_between(10_000, 50_000)
        read = self.int_between(sent // 2, sent)
        return {
            "sentVsRead": {"sent": sent, "read": read, "readRate": round(read * 100 / sent, 1)},
            "byType": [
                {"label": label, "count": self.int_between(1_000, 16_000)}
                for label in ("Booking Updates", "Tour Reminders", "Reviews", "Messages", "System")
            ],
            "byPriority": [
                {"label": label, "count": self.int_between(1_000, 30_000)}
                for label in ("High", "Medium", "Low")
            ],
            "deliveryTimeline": self.day_series(200, 700, date_from, date_to, days=14),
        }

    def chat_stats(self, date_from: date | None = None, date_to: date | None = None) -> dict[str, Any]:
        read = self.int_between(5_000, 25_000)
        unread = self.int_between(500, 5_000)
        return {
            "messagesOverTime": self.day_series(150, 450, date_from, date_to),
            "readVsUnread": {"read": read, "unread": unread, "readRate": round(read * 100 / (read + unread), 1)},
            "topConversations": self.leaderboard(
                ["Tour Guide Support", "Booking Assistance", "Customer Service", "Technical Support", "General Inquiries"],
                500,
                2_500,
            ),
            "avgResponseTime": self.float_between(0.2, 6.0, 1),
        }

    def employees_stats(self, date_from: date | None = None, date_to: date | None = None) -> dict[str, Any]:
        scheduled = self.int_between(1_000, 3_000)
        completed = self.int_between(scheduled * 8 // 10, scheduled)
        return {
            "countsByRole": [
                {"label": label, "count": self.int_between(5, 50)}
                for label in ("Customer Support", "Tour Guides", "Sales", "Marketing", "Engineering", "Operations")
            ],
            "countsByDepartment": [
                {"label": label, "count": self.int_between(5, 70)}
                for label in ("Operations", "Customer Success", "Technology", "Marketing")
            ],
            "countsByStatus": [
                {"label": label, "count": self.int_between(1, 120)}
                for label in ("Active", "On Leave", "Part-time")
            ],
            "shiftsData": {
                "scheduled": scheduled,
                "completed": completed,
                "completionRate": round(completed * 100 / scheduled, 1),
            },
        }

    def company_overview(self) -> dict[str, Any]:
        return {
            "id": self.object_id(),
            "name": self.faker.company(),
            "email": self.faker.company_email(),
            "phone": self.faker.phone_number(),
            "country": self.faker.country(),
            "verified": self.chance(0.7),
            "totalTours": self.int_between(1, 120),
            "totalEmployees": self.int_between(1, 80),
            "totalBookings": self.int_between(0, 5_000),
            "avgRating": self.float_between(3.0, 5.0, 1),
            "revenue": self.int_between(1_000, 500_000),
            "joinedAt": iso(self.recent(900)),
        }

    def employee(self) -> dict[str, Any]:
        """Row of a company's employee table."""
        name = self.faker.name()
        email = self.faker.email()
        phone = self.faker.phone_number()
        status = self.choice(EMPLOYEE_STATUSES)
        created = self.recent(5 * 365)
        joined = self.recent(5 * 365)
        return {
            "id": self.object_id(),
            "user": {
                "name": name,
                "email": email,
                "phone": phone,
                "avatar": f"https://i.pravatar.cc/150?u={self.int_between(1, 10_000)}",
            },
            "companyId": None,
            "status": status,
            "employmentType": self.choice(EMPLOYMENT_TYPES),
            "salary": self.int_between(20_000, 90_000),
            "currency": self.choice(CURRENCIES + ("GBP",)),
            "paymentMode": self.choice(SALARY_PAYMENT_MODES),
            "dateOfJoining": iso(joined),
            "dateOfLeaving": iso(self.between(joined, self.anchor)) if status == "terminated" else None,
            "contactPhone": phone,
            "contactEmail": email,
            "shiftSummary": "09:00-17:00, Mon-Fri",
            "lastLogin": iso(self.recent(14)) if self.chance() else None,
            "statusBadge": {"label": status, "tone": _STATUS_TONES.get(status, "muted")},
            "isDeleted": False,
            "createdAt": iso(created),
            "updatedAt": iso(self.between(created, self.anchor)),
        }

    # ─── Stateful Entities (seed data) ────────────────────────────────────────

    def payment_account(self) -> dict[str, Any]:
        created = self.recent(180)
        is_active = self.chance(0.7)
        return {
            "id": self.object_id(),
            "ownerType": self.choice(PAYMENT_OWNER_TYPES),
            "ownerId": self.object_id(),
            "provider": "stripe",
            "purpose": self.choice(PAYMENT_PURPOSES),
            "label": f"{self.faker.company()} {self.choice(['Main', 'Payouts', 'Ops'])}",
            "isActive": is_active,
            "isBackup": not is_active or self.chance(0.4),
            "isDeleted": False,
            "card": {
                "brand": self.choice(CARD_BRANDS),
                "last4": self.faker.numerify("####"),
                "expMonth": self.int_between(1, 12),
                "expYear": self.anchor.year + self.int_between(1, 6),
            },
            "createdAt": iso(created),
            "updatedAt": iso(self.between(created, self.anchor)),
        }

    def enum_value(self, order: int | None = None) -> dict[str, Any]:
        words = self.faker.words(nb=2)
        key = "-".join(words).lower()
        return {
            "key": key,
            "value": key,
            "label": " ".join(words).title(),
            "description": self.faker.sentence(),
            "order": order if order is not None else self.int_between(0, 99),
            "active": self.chance(0.5),
        }

    def enum_group(self, name: str | None = None, count: int = 4) -> dict[str, Any]:
        values: dict[str, dict[str, Any]] = {}
        while len(values) < count:
            value = self.enum_value()
            values.setdefault(value["key"], value)
        return {
            "name": name or "_".join(self.faker.words(nb=2)).lower(),
            "description": self.faker.sentence(),
            "values": sorted(values.values(), key=lambda v: v["order"]),
            "version": 1,
        }

    def reset_password_request(self) -> dict[str, Any]:
        created = self.recent(365)
        status = self.choice(PASSWORD_REQUEST_STATUSES)
        reviewer = None
        if status != "pending" and self.chance(0.7):
            reviewer = {
                "reviewedById": self.object_id(),
                "reviewerName": self.faker.name(),
                "reviewerEmail": self.faker.email(),
            }
        return {
            "id": self.uuid(),
            "reason": self.faker.sentence(),
            "status": status,
            "rejectionReason": self.faker.sentence() if status == "rejected" else None,
            "expiresAt": iso(created + timedelta(days=self.int_between(1, 14))),
            "emailSentAt": iso(created + timedelta(minutes=self.int_between(1, 120))) if self.chance(0.8) else None,
            "createdAt": iso(created),
            "updatedAt": iso(self.between(created, self.anchor)),
            "user": {
                "guideId": self.uuid(),
                "name": self.faker.name(),
                "email": self.faker.email(),
            },
            "reviewer": reviewer,
        }

    def chat_message(self) -> dict[str, Any]:
        created = self.recent(14)
        return {
            "id": self.object_id(),
            "sender": self.person("traveler"),
            "receiver": self.person("support"),
            "message": self.faker.sentence(),
            "isRead": self.chance(0.5),
            "isDelivered": True,
            "isEdited": False,
            "moderationStatus": "clean",
            "createdAt": iso(created),
            "updatedAt": iso(created),
        }

    def guide_banner(self) -> dict[str, Any]:
        created = iso(self.anchor)
        return {
            "id": self.object_id(),
            "asset": f"https://picsum.photos/seed/{self.faker.pystr(min_chars=8, max_chars=8)}/1600/600",
            "alt": " ".join(self.faker.words(nb=3)),
            "caption": self.faker.catch_phrase(),
            "order": self.int_between(0, 999),
            "active": self.chance(0.5),
            "createdAt": created,
            "updatedAt": created,
        }

    def advertising_price(self) -> dict[str, Any]:
        created = iso(self.anchor)
        return {
            "id": self.object_id(),
            "placement": self.choice(PLACEMENTS),
            "price": self.float_between(5, 500),
            "currency": self.choice(CURRENCIES),
            "defaultDurationDays": self.choice((None, 7, 14, 30)),
            "allowedDurationsDays": sorted(self.sample((1, 7, 14, 30, 60), 0, 3)),
            "active": self.chance(0.85),
            "createdAt": created,
            "updatedAt": created,
        }

    def advertisement(self) -> dict[str, Any]:
        impressions = self.int_between(0, 20_000)
        clicks = self.int_between(0, impressions)
        created = self.recent(90)
        status = self.choice(AD_STATUSES)
        return {
            "id": self.uuid(),
            "guideId": self.uuid(),
            "guideName": self.faker.name(),
            "title": self.faker.sentence(nb_words=5).rstrip("."),
            "placements": self.sample(PLACEMENTS, 1, 2),
            "status": status,
            "reason": self.faker.sentence() if status == "rejected" else None,
            "price": self.int_between(10, 5_000),
            "currency": "USD",
            "startAt": iso(self.recent(30)),
            "endAt": iso(self.soon(90)),
            "autoRenew": self.chance(),
            "impressions": impressions,
            "clicks": clicks,
            "ctr": round(clicks / impressions, 4) if impressions else None,
            "createdAt": iso(created),
            "updatedAt": iso(self.between(created, self.anchor)),
            "isDeleted": False,
            "deletedAt": None,
            "deletedBy": None,
        }

    def subscription_tier(self) -> dict[str, Any]:
        created = iso(self.anchor)
        return {
            "_id": self.object_id(),
            "key": f"{self.faker.slug()}-{self.faker.pystr(min_chars=4, max_chars=4).lower()}",
            "title": f"{self.faker.word().title()} Plan",
            "price": self.float_between(0, 199),
            "currency": "USD",
            "billingCycleDays": [30],
            "perks": self.sample(TIER_PERKS, 2, 2),
            "active": True,
            "createdAt": created,
            "updatedAt": created,
        }

    def comment_author(self) -> dict[str, Any]:
        return {
            "id": self.uuid(),
            "name": self.faker.name(),
            "avatarUrl": f"https://i.pravatar.cc/150?u={self.int_between(1, 10_000)}",
            "role": self.choice(USER_ROLES),
        }

    def article(self) -> dict[str, Any]:
        title = self.faker.sentence(nb_words=self.int_between(3, 8)).rstrip(".")
        created = self.recent(365)
        return {
            "id": self.uuid(),
            "title": title,
            "slug": "-".join(word.strip(".,").lower() for word in title.split()),
            "coverImageUrl": f"https://picsum.photos/seed/{self.faker.pystr(min_chars=8, max_chars=8)}/1200/630",
            "createdAt": iso(created),
            "updatedAt": iso(self.between(created, self.anchor)),
            "author": self.comment_author(),
        }

    def article_comment(self, article_id: str, parent_id: str | None = None, reply_count: int = 0) -> dict[str, Any]:
        """A root comment (``parent_id=None``) or a reply; replies are younger and get fewer likes."""
        is_root = parent_id is None
        created = self.recent(40 if is_root else 20)
        return {
            "id": self.uuid(),
            "articleId": article_id,
            "parentId": parent_id,
            "author": self.comment_author(),
            "content": self.faker.paragraph(nb_sentences=self.int_between(1, 4 if is_root else 3)),
            "likes": self.int_between(0, 300 if is_root else 80),
            "status": self.choice(COMMENT_STATUSES),
            "replyCount": reply_count,
            "createdAt": iso(created),
            "updatedAt": iso(self.between(created, self.anchor)),
        }


# Kinds whose builders accept an optional (date_from, date_to) range.
DATE_RANGED_KINDS = frozenset(
    {
        RecordKind.USERS_STATS,
        RecordKind.TOURS_STATS,
        RecordKind.REVIEWS_STATS,
        RecordKind.REPORTS_STATS,
        RecordKind.IMAGES_STATS,
        RecordKind.NOTIFICATIONS_STATS,
        RecordKind.CHAT_STATS,
        RecordKind.EMPLOYEES_STATS,
    }
)
