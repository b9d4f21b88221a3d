"""Print-batch endpoints: fetch-for-print and confirm-print per entity class.

Fetch endpoints are never cached; the print UI always renders fresh data.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ward_registry.core.config import Settings, get_settings
from ward_registry.core.dependencies import get_async_session, get_current_user, get_report_cache
from ward_registry.lib.report_cache import ReportCache
from ward_registry.models.leader import LeaderType
from ward_registry.models.user import User
from ward_registry.schemas.printing import (
    HouseholdPrintBatchResponse,
    LeaderPrintBatchResponse,
    MarkHouseholdsPrintedRequest,
    MarkLeadersPrintedRequest,
    PrintConfirmationResponse,
)
from ward_registry.services.print_service import (
    clamp_limit,
    fetch_households_for_print,
    fetch_leaders_for_print,
    mark_households_printed,
    mark_leaders_printed,
)

printing_router = APIRouter(prefix="/reports/printing", tags=["printing"])


@printing_router.get("/households")
async def fetch_households_for_print_endpoint(
    municipality: str | None = Query(None),
    barangay: str | None = Query(None),
    purok: str | None = Query(None),
    limit: int | None = Query(None, ge=1),
    session: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> HouseholdPrintBatchResponse:
    """Fetch the next batch of unprinted households."""
    records = await fetch_households_for_print(
        session,
        limit=clamp_limit(limit, settings.print_batch_default_limit, settings.print_batch_max_limit),
        municipality=municipality,
        barangay=barangay,
        purok=purok,
        sentinels=settings.preference_sentinels,
    )
    return HouseholdPrintBatchResponse(data=records)


@printing_router.post("/households/mark-printed")
async def mark_households_printed_endpoint(
    body: MarkHouseholdsPrintedRequest,
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    _current_user: User = Depends(get_current_user),
) -> PrintConfirmationResponse:
    """Confirm that a batch of households was printed."""
    confirmation = await mark_households_printed(session, cache, body.household_ids)
    return PrintConfirmationResponse(message="Households marked as printed", data=confirmation)


async def _fetch_leaders(
    session: AsyncSession,
    settings: Settings,
    role: LeaderType,
    municipality: str | None,
    barangay: str | None,
    purok: str | None,
    limit: int | None,
) -> LeaderPrintBatchResponse:
    records = await fetch_leaders_for_print(
        session,
        role,
        election_year=settings.election_year,
        limit=clamp_limit(limit, settings.print_batch_default_limit, settings.print_batch_max_limit),
        municipality=municipality,
        barangay=barangay,
        purok=purok,
        sentinels=settings.preference_sentinels,
    )
    return LeaderPrintBatchResponse(data=records)


@printing_router.get("/ward-leaders")
async def fetch_ward_leaders_for_print_endpoint(
    municipality: str | None = Query(None),
    barangay: str | None = Query(None),
    purok: str | None = Query(None),
    limit: int | None = Query(None, ge=1),
    session: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> LeaderPrintBatchResponse:
    """Fetch the next batch of unprinted ward leaders."""
    return await _fetch_leaders(session, settings, LeaderType.WARD_LEADER, municipality, barangay, purok, limit)


@printing_router.post("/ward-leaders/mark-printed")
async def mark_ward_leaders_printed_endpoint(
    body: MarkLeadersPrintedRequest,
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> PrintConfirmationResponse:
    """Confirm that a batch of ward leaders was printed."""
    confirmation = await mark_leaders_printed(
        session, cache, LeaderType.WARD_LEADER, body.leader_ids, election_year=settings.election_year
    )
    return PrintConfirmationResponse(message="Ward leaders marked as printed", data=confirmation)


@printing_router.get("/barangay-coordinators")
async def fetch_coordinators_for_print_endpoint(
    municipality: str | None = Query(None),
    barangay: str | None = Query(None),
    purok: str | None = Query(None),
    limit: int | None = Query(None, ge=1),
    session: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> LeaderPrintBatchResponse:
    """Fetch the next batch of unprinted barangay coordinators."""
    return await _fetch_leaders(
        session, settings, LeaderType.BARANGAY_COORDINATOR, municipality, barangay, purok, limit
    )


@printing_router.post("/barangay-coordinators/mark-printed")
async def mark_coordinators_printed_endpoint(
    body: MarkLeadersPrintedRequest,
    session: AsyncSession = Depends(get_async_session),
    cache: ReportCache = Depends(get_report_cache),
    settings: Settings = Depends(get_settings),
    _current_user: User = Depends(get_current_user),
) -> PrintConfirmationResponse:
    """Confirm that a batch of barangay coordinators was printed."""
    confirmation = await mark_leaders_printed(
        session, cache, LeaderType.BARANGAY_COORDINATOR, body.leader_ids, election_year=settings.election_year
    )
    return PrintConfirmationResponse(message="Barangay coordinators marked as printed", data=confirmation)
