"""Hierarchy report endpoints: leaders, households, members and coordinators."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ward_registry.api.cache import cached_response
from ward_registry.core.config import Settings, get_settings
from ward_registry.core.dependencies import get_async_session, get_current_user, get_report_cache, require_role
from ward_registry.lib.report_cache import ReportCache, build_cache_key
from ward_registry.models.leader import LeaderType
from ward_registry.models.user import User
from ward_registry.schemas.common import PaginationMeta, total_pages
from ward_registry.schemas.reports import (
    CoordinatorWardLeaderListResponse,
    HouseholdHeadListResponse,
    HouseholdMemberListResponse,
    HouseholdReportResponse,
    LeaderDetailResponse,
    LeaderListResponse,
    PrintStatusResponse,
    PrintStatusUpdate,
)
from ward_registry.services.print_service import update_leader_print_status
from ward_registry.services.report_service import (
    get_filter_options,
    get_leader,
    list_coordinators,
    list_households,
    list_households_for_leader,
    list_leaders,
    list_leaders_for_coordinator,
    list_members_for_household,
)

reports_router = APIRouter(prefix="/reports", tags=["reports"])

_LIST_ENDPOINTS = {
    LeaderType.WARD_LEADER: "ward-leaders",
    LeaderType.BARANGAY_COORDINATOR: "barangay-coordinators",
}


def _leader_detail_endpoint(role: LeaderType, voter_id: int) -> str:
    if role is LeaderType.WARD_LEADER:
        return f"leader:{voter_id}"
    return f"barangay-coordinators:{voter_id}"


@reports_router.get("/leaders", response_model=LeaderListResponse)
async def list_leaders_endpoint(
    request: Request,
    role: int = Query(1, ge=1, le=2, description="1 = ward leader, 2 = barangay coordinator"),
    municipality: str | None = Query(None),
    barangay: str | None = Query(None),
    name: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """List current ward leaders or barangay coordinators with filter options."""
    leader_type = LeaderType(role)

    async def produce() -> LeaderListResponse:
        leaders, total = await list_leaders(
            session,
            leader_type,
            election_year=settings.election_year,
            municipality=municipality,
            barangay=barangay,
            name=name,
            page=page,
            page_size=limit,
        )
        return LeaderListResponse(
            data=leaders,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages(total, limit),
            filter_options=await get_filter_options(session),
        )

    key = build_cache_key(
        _LIST_ENDPOINTS[leader_type],
        {
            "municipality": municipality,
            "barangay": barangay,
            "name": name,
            "page": page,
            "limit": limit,
            "year": settings.election_year,
        },
    )
    return await cached_response(request, cache, key, produce)


@reports_router.get("/barangay-coordinators", response_model=LeaderListResponse)
async def list_coordinators_endpoint(
    request: Request,
    municipality: str | None = Query(None),
    barangay: str | None = Query(None),
    name: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """List current barangay coordinators with filter options."""

    async def produce() -> LeaderListResponse:
        coordinators, total = await list_coordinators(
            session,
            election_year=settings.election_year,
            municipality=municipality,
            barangay=barangay,
            name=name,
            page=page,
            page_size=limit,
        )
        return LeaderListResponse(
            data=coordinators,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages(total, limit),
            filter_options=await get_filter_options(session),
        )

    key = build_cache_key(
        _LIST_ENDPOINTS[LeaderType.BARANGAY_COORDINATOR],
        {
            "municipality": municipality,
            "barangay": barangay,
            "name": name,
            "page": page,
            "limit": limit,
            "year": settings.election_year,
        },
    )
    return await cached_response(request, cache, key, produce)


@reports_router.get("/leaders/{voter_id}", response_model=LeaderDetailResponse)
async def get_leader_endpoint(
    voter_id: int,
    request: Request,
    role: int = Query(1, ge=1, le=2, description="1 = ward leader, 2 = barangay coordinator"),
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """Get one current leader by voter id."""
    leader_type = LeaderType(role)

    async def produce() -> LeaderDetailResponse:
        leader = await get_leader(session, leader_type, voter_id)
        if leader is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Leader not found")
        return LeaderDetailResponse(data=leader)

    key = build_cache_key(_leader_detail_endpoint(leader_type, voter_id))
    return await cached_response(request, cache, key, produce)


@reports_router.get("/leaders/{voter_id}/households", response_model=HouseholdHeadListResponse)
async def list_leader_households_endpoint(
    voter_id: int,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """List the households assigned to a ward leader."""

    async def produce() -> HouseholdHeadListResponse:
        return HouseholdHeadListResponse(data=await list_households_for_leader(session, voter_id))

    return await cached_response(request, cache, build_cache_key(f"leader:households:{voter_id}"), produce)


@reports_router.put("/leaders/{voter_id}/print-status")
async def update_leader_print_status_endpoint(
    voter_id: int,
    body: PrintStatusUpdate,
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    _admin: User = Depends(require_role("admin")),
) -> PrintStatusResponse:
    """Set or clear a ward leader's printed flag (admin only)."""
    leader = await update_leader_print_status(session, cache, voter_id, bool(body.is_printed))
    if leader is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ward leader not found")
    state = "printed" if body.is_printed else "not printed"
    return PrintStatusResponse(message=f"Leader print status updated to {state}", data=leader)


@reports_router.get("/households", response_model=HouseholdReportResponse)
async def list_households_endpoint(
    request: Request,
    municipality: str | None = Query(None),
    barangay: str | None = Query(None),
    name: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query("household_head_name", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """Paginated households report with sorting."""

    async def produce() -> HouseholdReportResponse:
        households, total = await list_households(
            session,
            municipality=municipality,
            barangay=barangay,
            name=name,
            page=page,
            page_size=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return HouseholdReportResponse(
            data=households,
            meta=PaginationMeta(total=total, page=page, limit=limit, total_pages=total_pages(total, limit)),
            filter_options=await get_filter_options(session, include_puroks=False),
        )

    key = build_cache_key(
        "households",
        {
            "municipality": municipality,
            "barangay": barangay,
            "name": name,
            "page": page,
            "limit": limit,
            "sortBy": sort_by,
            "sortOrder": sort_order,
        },
    )
    return await cached_response(request, cache, key, produce)


@reports_router.get("/households/{household_id}/members", response_model=HouseholdMemberListResponse)
async def list_household_members_endpoint(
    household_id: int,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """List a household's members, head first, with preference remarks."""

    async def produce() -> HouseholdMemberListResponse:
        members = await list_members_for_household(session, household_id, sentinels=settings.preference_sentinels)
        return HouseholdMemberListResponse(data=members)

    return await cached_response(request, cache, build_cache_key(f"household:{household_id}:members"), produce)


@reports_router.get(
    "/barangay-coordinators/{voter_id}/ward-leaders",
    response_model=CoordinatorWardLeaderListResponse,
)
async def list_coordinator_ward_leaders_endpoint(
    voter_id: int,
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    _current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """List the active ward leaders in a coordinator's barangay."""

    async def produce() -> CoordinatorWardLeaderListResponse:
        leaders = await list_leaders_for_coordinator(session, voter_id)
        if leaders is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Coordinator not found")
        return CoordinatorWardLeaderListResponse(data=leaders)

    key = build_cache_key(f"barangay-coordinators:{voter_id}:ward-leaders")
    return await cached_response(request, cache, key, produce)
