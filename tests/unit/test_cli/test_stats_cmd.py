"""Tests for the stats and token CLI commands."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from ward_registry.cli.app import app
from ward_registry.core.security import decode_token
from ward_registry.schemas.statistics import BarangayPrintCounts, BarangayPrintStatistics, PrintCounts, PrintStatistics

runner = CliRunner()

SECRET = "test-secret-key-that-is-at-least-32-characters-long"


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("JWT_SECRET_KEY", SECRET)
    monkeypatch.setenv("ELECTION_YEAR", "2025")


@pytest.fixture
def database() -> MagicMock:
    session = AsyncMock()
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    with (
        patch("ward_registry.core.database.init_engine") as init_engine,
        patch("ward_registry.core.database.get_session_factory", return_value=factory),
        patch("ward_registry.core.database.dispose_engine", new_callable=AsyncMock) as dispose_engine,
    ):
        yield MagicMock(init_engine=init_engine, dispose_engine=dispose_engine, session=session)


class TestStatsShow:
    def test_prints_table(self, database: MagicMock) -> None:
        stats = PrintStatistics(
            households=PrintCounts(printed=1, not_printed=3, total=4),
            ward_leaders=PrintCounts(printed=0, not_printed=2, total=2),
            coordinators=PrintCounts(printed=0, not_printed=0, total=0),
        )
        with patch(
            "ward_registry.services.statistics_service.get_print_statistics",
            new_callable=AsyncMock,
            return_value=stats,
        ) as mock_stats:
            result = runner.invoke(app, ["stats", "show", "--municipality", "Alpha Town"])
        assert result.exit_code == 0, result.output
        assert "election year 2025" in result.output
        assert "Households" in result.output
        assert mock_stats.await_args.kwargs["municipality"] == "Alpha Town"
        database.init_engine.assert_called_once_with("sqlite+aiosqlite:///:memory:")
        database.dispose_engine.assert_awaited_once()

    def test_engine_disposed_on_error(self, database: MagicMock) -> None:
        with patch(
            "ward_registry.services.statistics_service.get_print_statistics",
            new_callable=AsyncMock,
            side_effect=RuntimeError("boom"),
        ):
            result = runner.invoke(app, ["stats", "show"])
        assert result.exit_code != 0
        database.dispose_engine.assert_awaited_once()


class TestStatsByBarangay:
    def test_rows(self, database: MagicMock) -> None:
        row = BarangayPrintStatistics(
            barangay="Poblacion",
            households=BarangayPrintCounts(printed=1, not_printed=2, total=3, percentage=33),
            ward_leaders=BarangayPrintCounts(),
            coordinators=BarangayPrintCounts(),
        )
        with patch(
            "ward_registry.services.statistics_service.get_print_statistics_by_barangay",
            new_callable=AsyncMock,
            return_value=[row],
        ):
            result = runner.invoke(app, ["stats", "by-barangay"])
        assert result.exit_code == 0, result.output
        assert "Poblacion" in result.output
        assert "33" in result.output

    def test_no_rows(self, database: MagicMock) -> None:
        with patch(
            "ward_registry.services.statistics_service.get_print_statistics_by_barangay",
            new_callable=AsyncMock,
            return_value=[],
        ):
            result = runner.invoke(app, ["stats", "by-barangay"])
        assert "No data." in result.output


class TestToken:
    def test_mints_verifiable_token(self) -> None:
        result = runner.invoke(app, ["token", "encoder1", "--role", "encoder"])
        assert result.exit_code == 0, result.output
        payload = decode_token(result.output.strip(), SECRET)
        assert payload["sub"] == "encoder1"
        assert payload["role"] == "encoder"
