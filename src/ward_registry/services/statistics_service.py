"""Print statistics service: printed / not-printed counts per entity class."""

import math
from typing import Any

from sqlalchemy import ColumnElement, Select, case, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ward_registry.lib.filters import Equals, FilterExpr, Like, compile_filters, normalize_filter_value
from ward_registry.models.barangay import Barangay
from ward_registry.models.household import Household
from ward_registry.models.leader import Leader, LeaderType
from ward_registry.models.voter import Voter
from ward_registry.schemas.statistics import BarangayPrintCounts, BarangayPrintStatistics, PrintCounts, PrintStatistics
from ward_registry.services.leader_resolver import current_leader_subquery


def _count_columns(flag: ColumnElement[bool]) -> tuple[Any, Any]:
    printed = func.coalesce(func.sum(case((flag.is_(True), 1), else_=0)), 0).label("printed")
    return printed, func.count().label("total")


def _location_filters(municipality: str | None, barangay: str | None, *, exact: bool = False) -> list[FilterExpr]:
    expr = Equals if exact else Like
    filters: list[FilterExpr] = []
    if (value := normalize_filter_value(municipality)) is not None:
        filters.append(expr(Barangay.municipality, value))
    if (value := normalize_filter_value(barangay)) is not None:
        filters.append(expr(Barangay.name, value))
    return filters


def _household_counts_query(filters: list[FilterExpr]) -> Select[Any]:
    return (
        select(*_count_columns(Household.is_printed))
        .select_from(Household)
        .join(Voter, Voter.id == Household.head_voter_id)
        .outerjoin(Barangay, Barangay.id == Voter.barangay_id)
        .where(compile_filters(filters))
    )


def _leader_counts_query(
    role: LeaderType,
    election_year: int,
    filters: list[FilterExpr],
    *,
    require_households: bool,
) -> Select[Any]:
    current = current_leader_subquery(role)
    query = (
        select(*_count_columns(Leader.is_printed))
        .select_from(Leader)
        .join(current, Leader.id == current.c.leader_id)
        .join(Voter, Voter.id == Leader.voter_id)
        .outerjoin(Barangay, Barangay.id == Voter.barangay_id)
        .where(Leader.election_year == election_year, compile_filters(filters))
    )
    if require_households:
        query = query.where(exists().where(Household.leader_voter_id == Leader.voter_id))
    return query


def _to_counts(printed: int | None, total: int | None) -> PrintCounts:
    printed = int(printed or 0)
    total = int(total or 0)
    return PrintCounts(printed=printed, not_printed=total - printed, total=total)


def printed_percentage(printed: int, total: int) -> int:
    """Printed share of ``total`` as a whole percentage, halves rounded up."""
    if total <= 0:
        return 0
    return math.floor(printed * 100 / total + 0.5)


async def get_ward_leader_statistics(
    session: AsyncSession,
    *,
    election_year: int,
    municipality: str | None = None,
    barangay: str | None = None,
) -> PrintCounts:
    """Count current ward leaders with at least one household, by print status.

    Args:
        session: Database session.
        election_year: Election year of the resolved leader rows.
        municipality: Substring filter on the leader's municipality.
        barangay: Substring filter on the leader's barangay.

    Returns:
        PrintCounts.
    """
    query = _leader_counts_query(
        LeaderType.WARD_LEADER,
        election_year,
        _location_filters(municipality, barangay),
        require_households=True,
    )
    printed, total = (await session.execute(query)).one()
    return _to_counts(printed, total)


async def get_print_statistics(
    session: AsyncSession,
    *,
    election_year: int,
    municipality: str | None = None,
    barangay: str | None = None,
) -> PrintStatistics:
    """Printed / not-printed / total counts for every entity class.

    Args:
        session: Database session.
        election_year: Election year of the resolved leader rows.
        municipality: Substring filter on municipality.
        barangay: Substring filter on barangay.

    Returns:
        PrintStatistics for households, ward leaders and coordinators.
    """
    filters = _location_filters(municipality, barangay)
    households = (await session.execute(_household_counts_query(filters))).one()
    coordinators = (
        await session.execute(
            _leader_counts_query(LeaderType.BARANGAY_COORDINATOR, election_year, filters, require_households=False)
        )
    ).one()
    ward_leaders = await get_ward_leader_statistics(
        session, election_year=election_year, municipality=municipality, barangay=barangay
    )
    return PrintStatistics(
        households=_to_counts(*households),
        ward_leaders=ward_leaders,
        coordinators=_to_counts(*coordinators),
    )


async def get_print_statistics_by_barangay(
    session: AsyncSession,
    *,
    election_year: int,
    municipality: str | None = None,
) -> list[BarangayPrintStatistics]:
    """Per-barangay print counts with printed percentages.

    Args:
        session: Database session.
        election_year: Election year of the resolved leader rows.
        municipality: Exact municipality filter.

    Returns:
        One entry per barangay seen in any entity class, sorted by name.
    """
    filters = _location_filters(municipality, None, exact=True)
    queries = {
        "households": _household_counts_query(filters),
        "ward_leaders": _leader_counts_query(LeaderType.WARD_LEADER, election_year, filters, require_households=False),
        "coordinators": _leader_counts_query(
            LeaderType.BARANGAY_COORDINATOR, election_year, filters, require_households=False
        ),
    }

    counts: dict[str, dict[str | None, PrintCounts]] = {}
    for entity, query in queries.items():
        result = await session.execute(query.add_columns(Barangay.name).group_by(Barangay.name))
        counts[entity] = {name: _to_counts(printed, total) for printed, total, name in result.all()}

    barangays = sorted(
        {name for per_entity in counts.values() for name in per_entity},
        key=lambda name: (name is None, name or ""),
    )

    def with_percentage(entity: str, name: str | None) -> BarangayPrintCounts:
        entry = counts[entity].get(name, PrintCounts())
        return BarangayPrintCounts(
            **entry.model_dump(),
            percentage=printed_percentage(entry.printed, entry.total),
        )

    return [
        BarangayPrintStatistics(
            barangay=name,
            households=with_percentage("households", name),
            ward_leaders=with_percentage("ward_leaders", name),
            coordinators=with_percentage("coordinators", name),
        )
        for name in barangays
    ]
