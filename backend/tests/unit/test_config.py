"""Tests for application configuration."""

from __future__ import annotations

from backoffice.config import Settings, get_settings


def test_default_settings():
    """Settings should work with no environment at all."""
    settings = Settings(_env_file=None)
    assert settings.app_env == "development"
    assert settings.is_production is False
    assert settings.mock_auth_bypass is True
    assert settings.rate_limit_enabled is False
    assert settings.default_page_size == 5
    assert settings.latency_enabled is False


def test_production_detection():
    settings = Settings(_env_file=None, app_env="production")
    assert settings.is_production is True


def test_latency_enabled_by_max():
    settings = Settings(_env_file=None, mock_latency_min_ms=200, mock_latency_max_ms=500)
    assert settings.latency_enabled is True


def test_allowed_origins_list_parsing():
    """ALLOWED_ORIGINS should parse into a trimmed list."""
    settings = Settings(
        _env_file=None,
        allowed_origins="https://admin.example.com, https://ops.example.com ",
        app_base_url="https://admin.example.com/",
    )
    assert settings.allowed_origins_list == ["https://admin.example.com", "https://ops.example.com"]
    assert settings.normalized_app_base_url == "https://admin.example.com"


def test_allowed_origins_fallback_to_app_base_url():
    settings = Settings(_env_file=None, allowed_origins="", app_base_url="https://admin.example.com")
    assert settings.allowed_origins_list == ["https://admin.example.com"]


def test_auth_secret_reads_nextauth_alias(monkeypatch):
    monkeypatch.delenv("AUTH_SECRET", raising=False)
    monkeypatch.setenv("NEXTAUTH_SECRET", "shared-secret")
    assert Settings(_env_file=None).auth_secret == "shared-secret"


def test_mock_seed_from_env(monkeypatch):
    monkeypatch.setenv("MOCK_SEED", "54321")
    assert Settings(_env_file=None).mock_seed == 54321


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()


def test_allowed_origins_are_deduplicated():
    settings = Settings(_env_file=None, allowed_origins="https://a.example.com/,https://a.example.com,,")
    assert settings.allowed_origins_list == ["https://a.example.com"]
