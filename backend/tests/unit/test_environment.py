"""Tests for the environment manager (core/environment.py)."""

from __future__ import annotations

import pytest

from backoffice.config import Settings
from backoffice.core.environment import VALID_ENVS, get_environment_info, to_dict, validate_environment


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestEnvironmentInfo:
    def test_features_follow_settings(self):
        info = get_environment_info(_settings(mock_seed=7, rate_limit_enabled=True))
        assert info.seed == 7
        assert info.features["deterministic_fixtures"] is True
        assert info.features["rate_limiting"] is True
        assert info.features["auth_bypass"] is True
        assert info.features["simulated_latency"] is False

    def test_to_dict_is_camel_case(self):
        data = to_dict(get_environment_info(_settings(app_env="staging")))
        assert data["appEnv"] == "staging"
        assert set(data) == {"appEnv", "version", "seed", "features"}


class TestValidateEnvironment:
    def test_valid_envs(self):
        assert {"development", "test", "staging", "production"} == VALID_ENVS

    def test_development_defaults_pass(self):
        validate_environment(_settings())

    def test_unknown_env_raises(self):
        with pytest.raises(ValueError, match="APP_ENV"):
            validate_environment(_settings(app_env="qa"))

    def test_invalid_origin_raises(self):
        with pytest.raises(RuntimeError, match="ALLOWED_ORIGINS"):
            validate_environment(_settings(allowed_origins="not-a-url"))

    def test_wildcard_origin_allowed_outside_production(self):
        validate_environment(_settings(allowed_origins="*"))

    def test_wildcard_origin_rejected_in_production(self):
        with pytest.raises(RuntimeError, match="'\\*'"):
            validate_environment(
                _settings(app_env="production", allowed_origins="*", auth_secret="s", mock_auth_bypass=False)
            )

    def test_inverted_latency_bounds_raise(self):
        with pytest.raises(RuntimeError, match="MOCK_LATENCY"):
            validate_environment(_settings(mock_latency_min_ms=600, mock_latency_max_ms=100))

    def test_production_requires_auth_secret(self):
        with pytest.raises(RuntimeError, match="AUTH_SECRET"):
            validate_environment(_settings(app_env="production", auth_secret="", mock_auth_bypass=False))

    def test_production_forbids_auth_bypass(self):
        with pytest.raises(RuntimeError, match="MOCK_AUTH_BYPASS"):
            validate_environment(_settings(app_env="production", auth_secret="s", mock_auth_bypass=True))

    def test_production_with_secret_passes(self):
        validate_environment(
            _settings(
                app_env="production",
                auth_secret="s",
                mock_auth_bypass=False,
                allowed_origins="https://admin.example.com",
            )
        )
