"""Print statistics endpoints."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ward_registry.api.cache import cached_response
from ward_registry.core.config import Settings, get_settings
from ward_registry.core.dependencies import get_async_session, get_current_user, get_report_cache
from ward_registry.lib.report_cache import ReportCache, build_cache_key
from ward_registry.models.user import User
from ward_registry.schemas.statistics import (
    BarangayPrintStatisticsResponse,
    PrintStatisticsResponse,
    WardLeaderStatisticsResponse,
)
from ward_registry.services.report_service import get_filter_options
from ward_registry.services.statistics_service import (
    get_print_statistics,
    get_print_statistics_by_barangay,
    get_ward_leader_statistics,
)

statistics_router = APIRouter(prefix="/reports", tags=["statistics"])


@statistics_router.get("/print-statistics", response_model=PrintStatisticsResponse)
async def print_statistics_endpoint(
    request: Request,
    municipality: str | None = Query(None),
    barangay: str | None = Query(None),
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """Printed / not-printed counts for households, ward leaders and coordinators."""

    async def produce() -> PrintStatisticsResponse:
        stats = await get_print_statistics(
            session, election_year=settings.election_year, municipality=municipality, barangay=barangay
        )
        return PrintStatisticsResponse(
            data=stats,
            filter_options=await get_filter_options(session, include_puroks=False),
        )

    key = build_cache_key(
        "print-statistics",
        {"municipality": municipality, "barangay": barangay, "year": settings.election_year},
    )
    return await cached_response(request, cache, key, produce)


@statistics_router.get("/print-statistics-by-barangay", response_model=BarangayPrintStatisticsResponse)
async def print_statistics_by_barangay_endpoint(
    request: Request,
    municipality: str | None = Query(None),
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """Per-barangay print counts with printed percentages."""

    async def produce() -> BarangayPrintStatisticsResponse:
        stats = await get_print_statistics_by_barangay(
            session, election_year=settings.election_year, municipality=municipality
        )
        return BarangayPrintStatisticsResponse(data=stats)

    key = build_cache_key(
        "print-statistics-by-barangay",
        {"municipality": municipality, "year": settings.election_year},
    )
    return await cached_response(request, cache, key, produce)


@statistics_router.get("/ward-leaders-statistics", response_model=WardLeaderStatisticsResponse)
async def ward_leader_statistics_endpoint(
    request: Request,
    municipality: str | None = Query(None),
    barangay: str | None = Query(None),
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """Printed / not-printed counts of ward leaders with households."""

    async def produce() -> WardLeaderStatisticsResponse:
        counts = await get_ward_leader_statistics(
            session, election_year=settings.election_year, municipality=municipality, barangay=barangay
        )
        return WardLeaderStatisticsResponse(data=counts)

    # Kept under print-statistics so ward leader and household changes clear it
    key = build_cache_key(
        "print-statistics:ward-leaders",
        {"municipality": municipality, "barangay": barangay, "year": settings.election_year},
    )
    return await cached_response(request, cache, key, produce)
