"""Application settings via pydantic-settings.

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  DEVELOPER QUICK-START  — What env vars do I need?
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#
#  Local development needs NONE.  Every endpoint is served from in-memory
#  fixtures and auth is bypassed with a fixed mock admin.
#
#    MOCK_SEED=54321          → Deterministic fixtures across restarts
#    MOCK_LATENCY_MIN_MS=200  → Simulated network latency (0 disables)
#    MOCK_LATENCY_MAX_MS=500
#    DEFAULT_PAGE_SIZE=5      → Page size when the client sends none
#
# ─── Auth ─────────────────────────────────────────────────────────────────────
#
#   MOCK_AUTH_BYPASS=false + AUTH_SECRET=...  → Mutating routes require a
#   Bearer JWT signed with HS256 (same secret as the admin frontend).
#
# ─── Rate Limiting ────────────────────────────────────────────────────────────
#
#   RATE_LIMIT_ENABLED=true + REDIS_URL=redis://...  → Mutating routes are
#   limited to RATE_LIMIT_PER_MINUTE requests per caller.
#
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration loaded from environment variables.

    Called by: Every module that needs configuration (via ``get_settings()``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    # Comma-separated CORS origins.
    allowed_origins: str = "http://localhost:3000"
    app_base_url: str = "http://localhost:3000"

    # Redis  (rate limiting)
    redis_url: str = "redis://localhost:6379/0"

    # ─── Auth ─────────────────────────────────────────────────────────────────
    auth_secret: str = Field(
        default="",
        validation_alias=AliasChoices("AUTH_SECRET", "NEXTAUTH_SECRET"),
    )
    mock_auth_bypass: bool = True

    # ─── Mock Data ────────────────────────────────────────────────────────────
    # None = fresh random fixtures on every request.
    mock_seed: int | None = None
    mock_latency_min_ms: int = 0
    mock_latency_max_ms: int = 0
    default_page_size: int = 5

    # ─── Rate Limiting ────────────────────────────────────────────────────────
    rate_limit_enabled: bool = False
    rate_limit_per_minute: int = 60

    # ─── Derived ──────────────────────────────────────────────────────────────

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def latency_enabled(self) -> bool:
        """Simulated latency is on whenever the upper bound is positive."""
        return self.mock_latency_max_ms > 0

    @property
    def normalized_app_base_url(self) -> str:
        return self.app_base_url.rstrip("/")

    @property
    def allowed_origins_list(self) -> list[str]:
        """CORS origins, trimmed and de-duplicated in order.

        Falls back to the admin frontend's base URL when ALLOWED_ORIGINS
        is blank.
        """
        origins = dict.fromkeys(o.strip().rstrip("/") for o in self.allowed_origins.split(","))
        origins.pop("", None)
        return list(origins) or [self.normalized_app_base_url]


@lru_cache
def get_settings() -> Settings:
    return Settings()
