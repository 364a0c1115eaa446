"""Global pytest fixtures."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from backoffice.api.deps import get_config
from backoffice.config import Settings
from backoffice.main import create_app
from backoffice.mock.registry import MockRegistry, build_registry

TEST_SEED = 1234


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Isolated settings: no .env, auth bypassed, no latency, no Redis."""
    return Settings(_env_file=None, app_env="test")


@pytest.fixture
def registry() -> MockRegistry:
    """Fresh, deterministically seeded stores for each test."""
    return build_registry(TEST_SEED)


@pytest.fixture
def app(registry: MockRegistry, settings: Settings):
    test_app = create_app(registry)
    test_app.dependency_overrides[get_config] = lambda: settings
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
