"""Router test fixtures: a bare app with mocked session, user, settings and a fresh cache."""

from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from ward_registry.api.v1.printing import printing_router
from ward_registry.api.v1.reports import reports_router
from ward_registry.api.v1.statistics import statistics_router
from ward_registry.core.config import Settings, get_settings
from ward_registry.core.dependencies import get_async_session, get_current_user, get_report_cache
from ward_registry.lib.report_cache import ReportCache


def _mock_user(role: str = "admin") -> MagicMock:
    user = MagicMock()
    user.id = 1
    user.username = f"test{role}"
    user.role = role
    user.is_active = True
    return user


@pytest.fixture
def report_cache() -> ReportCache:
    return ReportCache()


@pytest.fixture
def make_client(
    settings: Settings, report_cache: ReportCache
) -> Callable[[str], AsyncClient]:
    def _make(role: str = "admin") -> AsyncClient:
        app = FastAPI()
        for router in (reports_router, printing_router, statistics_router):
            app.include_router(router, prefix="/api/v1")
        app.dependency_overrides[get_async_session] = lambda: AsyncMock()
        app.dependency_overrides[get_current_user] = lambda: _mock_user(role)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_report_cache] = lambda: report_cache
        return AsyncClient(transport=ASGITransport(app=app), base_url="https://test")

    return _make


@pytest.fixture
async def admin_client(make_client: Callable[[str], AsyncClient]) -> AsyncGenerator[AsyncClient]:
    async with make_client("admin") as client:
        yield client


@pytest.fixture
async def viewer_client(make_client: Callable[[str], AsyncClient]) -> AsyncGenerator[AsyncClient]:
    async with make_client("viewer") as client:
        yield client
