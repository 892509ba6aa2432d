"""Shared pytest fixtures for sales dashboard tests."""

import os

# Settings are cached on first use; pin the test environment before the app is imported.
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("TRACE_LOG_ENABLED", "false")
os.environ.setdefault("WEBHOOK_URL", "")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from sales_dashboard.main import app  # noqa: E402


@pytest.fixture
async def client():
    """Create async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def override_dependency():
    """Override a FastAPI dependency for the duration of a test."""

    def _override(dependency, provider):
        app.dependency_overrides[dependency] = provider

    yield _override
    app.dependency_overrides.clear()
