"""Tests for the application factory."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from ward_registry.main import create_app


@pytest.fixture
def app(monkeypatch: pytest.MonkeyPatch) -> FastAPI:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters-long")
    app = create_app()

    @app.get("/boom/value")
    async def value_error() -> None:
        msg = "Unsupported sort column: nope"
        raise ValueError(msg)

    @app.get("/boom/database")
    async def database_error() -> None:
        raise OperationalError("SELECT secret FROM v_info", {}, Exception("connection lost"))

    return app


class TestCreateApp:
    def test_routes_mounted(self, app: FastAPI) -> None:
        paths = {route.path for route in app.routes}  # type: ignore[attr-defined]
        assert "/api/v1/reports/leaders" in paths
        assert "/api/v1/reports/printing/households/mark-printed" in paths
        assert "/api/v1/reports/print-statistics" in paths

    async def test_value_error_is_400(self, app: FastAPI) -> None:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="https://test") as client:
            resp = await client.get("/boom/value")
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Unsupported sort column: nope"}

    async def test_database_error_is_generic_500(self, app: FastAPI) -> None:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="https://test") as client:
            resp = await client.get("/boom/database")
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Internal server error"}
        assert "v_info" not in resp.text

