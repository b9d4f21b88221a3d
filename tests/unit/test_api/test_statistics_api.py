"""Router tests for the print statistics endpoints."""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient

from ward_registry.lib.report_cache import PrintEntity, ReportCache
from ward_registry.schemas.common import FilterOptions
from ward_registry.schemas.statistics import (
    BarangayPrintCounts,
    BarangayPrintStatistics,
    PrintCounts,
    PrintStatistics,
)

MODULE = "ward_registry.api.v1.statistics"


def _stats() -> PrintStatistics:
    return PrintStatistics(
        households=PrintCounts(printed=1, not_printed=3, total=4),
        ward_leaders=PrintCounts(printed=0, not_printed=2, total=2),
        coordinators=PrintCounts(printed=0, not_printed=1, total=1),
    )


class TestPrintStatistics:
    async def test_payload(self, admin_client: AsyncClient) -> None:
        with (
            patch(f"{MODULE}.get_print_statistics", new_callable=AsyncMock, return_value=_stats()),
            patch(f"{MODULE}.get_filter_options", new_callable=AsyncMock, return_value=FilterOptions()),
        ):
            resp = await admin_client.get("/api/v1/reports/print-statistics")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["households"] == {"printed": 1, "not_printed": 3, "total": 4}
        assert data["wardLeaders"]["total"] == 2
        assert "filterOptions" in resp.json()

    async def test_invalidated_by_print_confirmation(
        self, admin_client: AsyncClient, report_cache: ReportCache
    ) -> None:
        with (
            patch(f"{MODULE}.get_print_statistics", new_callable=AsyncMock, return_value=_stats()) as mock_stats,
            patch(f"{MODULE}.get_filter_options", new_callable=AsyncMock, return_value=FilterOptions()),
        ):
            await admin_client.get("/api/v1/reports/print-statistics")
            await report_cache.invalidate_entity(PrintEntity.BARANGAY_COORDINATOR)
            resp = await admin_client.get("/api/v1/reports/print-statistics")
        assert resp.headers["X-Cache"] == "MISS"
        assert mock_stats.await_count == 2


class TestByBarangay:
    async def test_payload(self, admin_client: AsyncClient) -> None:
        row = BarangayPrintStatistics(
            barangay="Poblacion",
            households=BarangayPrintCounts(printed=1, not_printed=2, total=3, percentage=33),
            ward_leaders=BarangayPrintCounts(),
            coordinators=BarangayPrintCounts(),
        )
        with patch(
            f"{MODULE}.get_print_statistics_by_barangay", new_callable=AsyncMock, return_value=[row]
        ) as mock_stats:
            resp = await admin_client.get(
                "/api/v1/reports/print-statistics-by-barangay", params={"municipality": "Alpha Town"}
            )
        assert resp.status_code == 200
        assert resp.json()["data"][0]["households"]["percentage"] == 33
        assert mock_stats.await_args.kwargs["municipality"] == "Alpha Town"


class TestWardLeaderStatistics:
    async def test_cached_under_statistics(self, admin_client: AsyncClient, report_cache: ReportCache) -> None:
        counts = PrintCounts(printed=1, not_printed=1, total=2)
        with patch(f"{MODULE}.get_ward_leader_statistics", new_callable=AsyncMock, return_value=counts):
            resp = await admin_client.get("/api/v1/reports/ward-leaders-statistics")
        assert resp.json() == {"data": {"printed": 1, "not_printed": 1, "total": 2}}
        assert await report_cache.get("reports:print-statistics:ward-leaders:year=2025") is not None
        await report_cache.invalidate_entity(PrintEntity.HOUSEHOLD)
        assert await report_cache.get("reports:print-statistics:ward-leaders:year=2025") is None
