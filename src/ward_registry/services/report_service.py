"""Report service: the coordinator -> leader -> household -> member hierarchy.

All functions are read-only. Leader rows always go through the
latest-record resolver before any other join, so a voter with several
dated assignments appears exactly once.
"""

from datetime import date
from typing import Any

from loguru import logger
from sqlalchemy import ColumnElement, Select, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from ward_registry.lib.filters import AnyOf, FilterExpr, Like, compile_filters, normalize_filter_value
from ward_registry.lib.preferences import PreferenceSentinels, classify_preference
from ward_registry.models.barangay import Barangay
from ward_registry.models.household import Household, HouseholdMember
from ward_registry.models.leader import Leader, LeaderType
from ward_registry.models.voter import RECORD_TYPE_REGISTERED, Voter
from ward_registry.schemas.common import BarangayOption, FilterOptions, MunicipalityOption, PurokOption
from ward_registry.schemas.reports import (
    HEAD_ROLE,
    MEMBER_ROLE,
    CoordinatorWardLeader,
    HouseholdHead,
    HouseholdMemberRow,
    HouseholdReportRow,
    LeaderSummary,
)
from ward_registry.services.leader_resolver import current_leader_subquery, resolve_current_leader
from ward_registry.services.preference_service import load_candidate_directory, load_preferences

HOUSEHOLD_SORT_FIELDS = (
    "household_id",
    "household_head_name",
    "barangay",
    "municipality",
    "street_address",
    "household_members_count",
    "registration_date",
    "is_printed",
)


def format_full_name(first: str | None, middle: str | None, last: str | None) -> str:
    """Join name parts with single spaces, skipping blanks."""
    return " ".join(part.strip() for part in (first, middle, last) if part and part.strip())


def full_name_expr(voter: Any) -> ColumnElement[str]:
    """SQL expression for ``first middle last`` with NULL parts treated as empty."""
    return (
        func.coalesce(voter.first_name, "")
        + " "
        + func.coalesce(voter.middle_name, "")
        + " "
        + func.coalesce(voter.last_name, "")
    )


def location_filters(
    voter: Any,
    *,
    municipality: str | None = None,
    barangay: str | None = None,
    name: str | None = None,
) -> list[FilterExpr]:
    """Substring filters on location and voter name shared by the listings.

    ``all`` and blank values are ignored.
    """
    filters: list[FilterExpr] = []
    if (value := normalize_filter_value(municipality)) is not None:
        filters.append(Like(Barangay.municipality, value))
    if (value := normalize_filter_value(barangay)) is not None:
        filters.append(Like(Barangay.name, value))
    if (value := normalize_filter_value(name)) is not None:
        filters.append(
            AnyOf(
                [
                    Like(voter.first_name, value),
                    Like(voter.middle_name, value),
                    Like(voter.last_name, value),
                    Like(full_name_expr(voter), value),
                ]
            )
        )
    return filters


def _age(birthday: date | None, today: date | None = None) -> int | None:
    if birthday is None:
        return None
    today = today or date.today()
    return today.year - birthday.year - ((today.month, today.day) < (birthday.month, birthday.day))


def _printed(value: bool | int | None) -> int:
    return 1 if value else 0


def _ward_leaders_in_barangay_count() -> ColumnElement[int]:
    """Correlated count of current, active ward leaders sharing the outer voter's barangay."""
    ward_current = current_leader_subquery(LeaderType.WARD_LEADER)
    ward_leader = aliased(Leader)
    ward_voter = aliased(Voter)
    return (
        select(func.count(distinct(ward_leader.voter_id)))
        .select_from(ward_leader)
        .join(ward_current, ward_leader.id == ward_current.c.leader_id)
        .join(ward_voter, ward_voter.id == ward_leader.voter_id)
        .where(ward_leader.status.is_(None), ward_voter.barangay_id == Voter.barangay_id)
        .correlate(Voter)
        .scalar_subquery()
    )


def _leader_summary_query(role: LeaderType) -> Select[Any]:
    """Base select of current leaders of ``role`` with their summary columns."""
    current = current_leader_subquery(role)
    columns: list[Any] = [
        Leader.id,
        Voter.id,
        Voter.first_name,
        Voter.middle_name,
        Voter.last_name,
        Barangay.name,
        Barangay.municipality,
        Leader.is_printed,
    ]
    if role is LeaderType.WARD_LEADER:
        columns.append(func.count(distinct(Household.id)).label("household_count"))
    else:
        columns.append(_ward_leaders_in_barangay_count().label("ward_leaders_count"))

    query = (
        select(*columns)
        .select_from(Leader)
        .join(current, Leader.id == current.c.leader_id)
        .join(Voter, Voter.id == Leader.voter_id)
        .outerjoin(Barangay, Barangay.id == Voter.barangay_id)
    )
    if role is LeaderType.WARD_LEADER:
        query = query.outerjoin(Household, Household.leader_voter_id == Leader.voter_id).group_by(
            Leader.id,
            Voter.id,
            Voter.first_name,
            Voter.middle_name,
            Voter.last_name,
            Barangay.name,
            Barangay.municipality,
            Leader.is_printed,
        )
    else:
        query = query.where(Voter.record_type == RECORD_TYPE_REGISTERED, Leader.status.is_(None))
    return query


def _to_leader_summary(row: Any, role: LeaderType) -> LeaderSummary:
    leader_id, voter_id, first, middle, last, barangay, municipality, is_printed, count = row
    summary = LeaderSummary(
        v_id=voter_id,
        leader_id=leader_id,
        full_name=format_full_name(first, middle, last),
        barangay=barangay,
        municipality=municipality,
        is_printed=_printed(is_printed),
    )
    if role is LeaderType.WARD_LEADER:
        summary.household_count = int(count or 0)
    else:
        summary.ward_leaders_count = int(count or 0)
    return summary


async def list_leaders(
    session: AsyncSession,
    role: LeaderType,
    *,
    election_year: int,
    municipality: str | None = None,
    barangay: str | None = None,
    name: str | None = None,
    page: int = 1,
    page_size: int = 10,
) -> tuple[list[LeaderSummary], int]:
    """List current ward leaders or barangay coordinators.

    Ward leaders carry ``household_count`` (leaders without households
    are listed with 0). Coordinators carry ``ward_leaders_count`` and
    must be registered voters whose assignment is still active.

    Args:
        session: Database session.
        role: Leader type to list.
        election_year: Election year the resolved row must belong to.
        municipality: Substring filter on the leader's municipality.
        barangay: Substring filter on the leader's barangay.
        name: Substring filter on first, middle, last or full name.
        page: Page number (1-based).
        page_size: Items per page.

    Returns:
        Tuple of (leaders, total count).
    """
    filters = location_filters(Voter, municipality=municipality, barangay=barangay, name=name)
    where = (Leader.election_year == election_year, compile_filters(filters))

    current = current_leader_subquery(role)
    count_query = (
        select(func.count(distinct(Leader.voter_id)))
        .select_from(Leader)
        .join(current, Leader.id == current.c.leader_id)
        .join(Voter, Voter.id == Leader.voter_id)
        .outerjoin(Barangay, Barangay.id == Voter.barangay_id)
        .where(*where)
    )
    if role is LeaderType.BARANGAY_COORDINATOR:
        count_query = count_query.where(Voter.record_type == RECORD_TYPE_REGISTERED, Leader.status.is_(None))
    total = (await session.execute(count_query)).scalar_one()

    query = (
        _leader_summary_query(role)
        .where(*where)
        .order_by(Barangay.municipality, Barangay.name, Voter.last_name, Voter.first_name, Voter.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await session.execute(query)
    leaders = [_to_leader_summary(row, role) for row in result.all()]
    logger.debug("Listed {} of {} leaders (type {})", len(leaders), total, int(role))
    return leaders, total


async def list_coordinators(
    session: AsyncSession,
    *,
    election_year: int,
    municipality: str | None = None,
    barangay: str | None = None,
    name: str | None = None,
    page: int = 1,
    page_size: int = 10,
) -> tuple[list[LeaderSummary], int]:
    """List current barangay coordinators. See :func:`list_leaders`."""
    return await list_leaders(
        session,
        LeaderType.BARANGAY_COORDINATOR,
        election_year=election_year,
        municipality=municipality,
        barangay=barangay,
        name=name,
        page=page,
        page_size=page_size,
    )


async def get_leader(session: AsyncSession, role: LeaderType, voter_id: int) -> LeaderSummary | None:
    """Get the current leader summary of one voter.

    Args:
        session: Database session.
        role: Leader type.
        voter_id: The leader's voter id.

    Returns:
        The summary, or None if the voter has no current row of that type.
    """
    result = await session.execute(_leader_summary_query(role).where(Voter.id == voter_id))
    row = result.first()
    if row is None:
        return None
    return _to_leader_summary(row, role)


def _members_count_expr() -> ColumnElement[int]:
    return (
        select(func.count(HouseholdMember.id))
        .where(HouseholdMember.head_voter_id == Household.head_voter_id)
        .correlate(Household)
        .scalar_subquery()
    )


async def list_households_for_leader(session: AsyncSession, leader_voter_id: int) -> list[HouseholdHead]:
    """List the households assigned to a ward leader.

    Args:
        session: Database session.
        leader_voter_id: The ward leader's voter id.

    Returns:
        Households ordered by location then head name. Empty if the voter
        is not a current ward leader.
    """
    current = current_leader_subquery(LeaderType.WARD_LEADER, voter_id=leader_voter_id)
    head = aliased(Voter)
    leader_voter = aliased(Voter)
    query = (
        select(
            Household.id,
            Household.head_voter_id,
            head.first_name,
            head.middle_name,
            head.last_name,
            Barangay.name,
            Barangay.municipality,
            Household.purok,
            _members_count_expr(),
            leader_voter.first_name,
            leader_voter.middle_name,
            leader_voter.last_name,
            Household.date_saved,
            Household.is_printed,
        )
        .select_from(Household)
        .join(current, current.c.voter_id == Household.leader_voter_id)
        .outerjoin(head, head.id == Household.head_voter_id)
        .outerjoin(leader_voter, leader_voter.id == Household.leader_voter_id)
        .outerjoin(Barangay, Barangay.id == head.barangay_id)
        .where(Household.leader_voter_id == leader_voter_id)
        .order_by(Barangay.municipality, Barangay.name, full_name_expr(head), Household.id)
    )
    result = await session.execute(query)
    return [
        HouseholdHead(
            household_id=household_id,
            household_head_id=head_id,
            household_head_name=format_full_name(h_first, h_middle, h_last),
            location=barangay,
            municipality=municipality,
            street_address=purok,
            household_members_count=int(members or 0),
            leader_name=format_full_name(l_first, l_middle, l_last),
            registration_date=date_saved,
            is_printed=_printed(is_printed),
        )
        for (
            household_id,
            head_id,
            h_first,
            h_middle,
            h_last,
            barangay,
            municipality,
            purok,
            members,
            l_first,
            l_middle,
            l_last,
            date_saved,
            is_printed,
        ) in result.all()
    ]


async def list_members_for_household(
    session: AsyncSession,
    household_id: int,
    *,
    sentinels: PreferenceSentinels | None = None,
) -> list[HouseholdMemberRow]:
    """List the members of a household, head first, with preference remarks.

    When no join row exists for the head, a head row is synthesized from
    the household's head voter.

    Args:
        session: Database session.
        household_id: Household id.
        sentinels: Preference sentinel configuration.

    Returns:
        Member rows, or an empty list for an unknown household.
    """
    household = await session.get(Household, household_id)
    if household is None:
        return []

    head_id = household.head_voter_id
    head_voter = await session.get(Voter, head_id) if head_id is not None else None
    head_name = format_full_name(
        head_voter.first_name if head_voter else None,
        head_voter.middle_name if head_voter else None,
        head_voter.last_name if head_voter else None,
    )

    rows: list[HouseholdMemberRow] = []
    if head_id is not None:
        result = await session.execute(
            select(HouseholdMember, Voter, Barangay)
            .join(Voter, Voter.id == HouseholdMember.member_voter_id)
            .outerjoin(Barangay, Barangay.id == Voter.barangay_id)
            .where(HouseholdMember.head_voter_id == head_id)
        )
        for link, member, barangay in result.all():
            rows.append(
                _member_row(household, link.id, head_name, member, barangay, is_head=member.id == head_id),
            )

    if not any(row.household_role == HEAD_ROLE for row in rows):
        logger.debug("Household {} has no head member row; synthesizing one", household_id)
        head_barangay = (
            await session.get(Barangay, head_voter.barangay_id)
            if head_voter is not None and head_voter.barangay_id is not None
            else None
        )
        rows.append(_member_row(household, None, head_name, head_voter, head_barangay, is_head=True))

    preferences = await load_preferences(session, [row.member_id for row in rows if row.member_id is not None])
    candidates = await load_candidate_directory(session)
    for row in rows:
        record = preferences.get(row.member_id) if row.member_id is not None else None
        row.remarks = classify_preference(record, candidates, sentinels)

    rows.sort(key=lambda row: (row.household_role != HEAD_ROLE, row.member_name.casefold(), row.member_name))
    return rows


def _member_row(
    household: Household,
    link_id: int | None,
    head_name: str,
    member: Voter | None,
    barangay: Barangay | None,
    *,
    is_head: bool,
) -> HouseholdMemberRow:
    return HouseholdMemberRow(
        member_record_id=link_id,
        household_head_id=household.head_voter_id,
        household_head_name=head_name,
        member_id=member.id if member is not None else household.head_voter_id,
        member_name=format_full_name(member.first_name, member.middle_name, member.last_name) if member else head_name,
        gender=member.gender if member else None,
        birthdate=member.birthday if member else None,
        age=_age(member.birthday) if member else None,
        precinct_no=member.precinct_no if member else None,
        barangay=barangay.name if barangay else None,
        municipality=barangay.municipality if barangay else None,
        street_address=household.purok,
        registration_date=household.date_saved,
        is_printed=_printed(household.is_printed),
        household_role=HEAD_ROLE if is_head else MEMBER_ROLE,
        remarks="",
    )


async def list_leaders_for_coordinator(
    session: AsyncSession,
    coordinator_voter_id: int,
) -> list[CoordinatorWardLeader] | None:
    """List the active ward leaders in a barangay coordinator's barangay.

    Args:
        session: Database session.
        coordinator_voter_id: The coordinator's voter id.

    Returns:
        Ward leaders ordered by surname, or None if the voter is not a
        current barangay coordinator.
    """
    coordinator = await resolve_current_leader(session, LeaderType.BARANGAY_COORDINATOR, coordinator_voter_id)
    if coordinator is None:
        return None
    coordinator_voter = await session.get(Voter, coordinator_voter_id)
    if coordinator_voter is None or coordinator_voter.barangay_id is None:
        return []

    current = current_leader_subquery(LeaderType.WARD_LEADER)
    households_count = (
        select(func.count(distinct(Household.id)))
        .where(Household.leader_voter_id == Leader.voter_id)
        .correlate(Leader)
        .scalar_subquery()
    )
    members_count = (
        select(func.count(HouseholdMember.id))
        .select_from(HouseholdMember)
        .join(Household, Household.head_voter_id == HouseholdMember.head_voter_id)
        .where(Household.leader_voter_id == Leader.voter_id)
        .correlate(Leader)
        .scalar_subquery()
    )
    query = (
        select(
            Leader,
            Voter,
            Barangay.name,
            Barangay.municipality,
            households_count,
            members_count,
        )
        .select_from(Leader)
        .join(current, Leader.id == current.c.leader_id)
        .join(Voter, Voter.id == Leader.voter_id)
        .outerjoin(Barangay, Barangay.id == Voter.barangay_id)
        .where(Voter.barangay_id == coordinator_voter.barangay_id, Leader.status.is_(None))
        .order_by(Voter.last_name, Voter.first_name, Voter.id)
    )
    result = await session.execute(query)
    return [
        CoordinatorWardLeader(
            v_id=voter.id,
            name=format_full_name(voter.first_name, voter.middle_name, voter.last_name),
            assigned_area=f"{barangay or ''}, {municipality or ''}",
            households_count=int(households or 0),
            members_count=int(members or 0),
            contact_number=voter.mobile_phone,
            last_updated=leader.date_added.isoformat(sep=" ") if leader.date_added else "N/A",
            is_printed=_printed(leader.is_printed),
        )
        for leader, voter, barangay, municipality, households, members in result.all()
    ]


async def list_households(
    session: AsyncSession,
    *,
    municipality: str | None = None,
    barangay: str | None = None,
    name: str | None = None,
    page: int = 1,
    page_size: int = 10,
    sort_by: str = "household_head_name",
    sort_order: str = "asc",
) -> tuple[list[HouseholdReportRow], int]:
    """Paginated households report.

    Args:
        session: Database session.
        municipality: Substring filter on the head's municipality.
        barangay: Substring filter on the head's barangay.
        name: Substring filter on the head's name.
        page: Page number (1-based).
        page_size: Items per page.
        sort_by: One of :data:`HOUSEHOLD_SORT_FIELDS`.
        sort_order: ``asc`` or ``desc``.

    Returns:
        Tuple of (households, total count).

    Raises:
        ValueError: If the sort column or direction is not allowed.
    """
    members_count = _members_count_expr()
    sort_columns: dict[str, Any] = {
        "household_id": Household.id,
        "household_head_name": full_name_expr(Voter),
        "barangay": Barangay.name,
        "municipality": Barangay.municipality,
        "street_address": Household.purok,
        "household_members_count": members_count,
        "registration_date": Household.date_saved,
        "is_printed": Household.is_printed,
    }
    if sort_by not in sort_columns:
        msg = f"Unsupported sort column: {sort_by}"
        raise ValueError(msg)
    direction = sort_order.lower()
    if direction not in ("asc", "desc"):
        msg = f"Unsupported sort order: {sort_order}"
        raise ValueError(msg)

    filters = location_filters(Voter, municipality=municipality, barangay=barangay, name=name)
    where = (Household.head_voter_id.is_not(None), compile_filters(filters))

    count_query = (
        select(func.count(distinct(Household.id)))
        .select_from(Household)
        .join(Voter, Voter.id == Household.head_voter_id)
        .outerjoin(Barangay, Barangay.id == Voter.barangay_id)
        .where(*where)
    )
    total = (await session.execute(count_query)).scalar_one()
    if total == 0:
        return [], 0

    sort_column = sort_columns[sort_by]
    query = (
        select(
            Household.id,
            Household.head_voter_id,
            Voter.first_name,
            Voter.middle_name,
            Voter.last_name,
            Barangay.name,
            Barangay.municipality,
            Household.purok,
            members_count,
            Household.date_saved,
            Household.is_printed,
        )
        .select_from(Household)
        .join(Voter, Voter.id == Household.head_voter_id)
        .outerjoin(Barangay, Barangay.id == Voter.barangay_id)
        .where(*where)
        .order_by(sort_column.desc() if direction == "desc" else sort_column.asc(), Household.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await session.execute(query)
    households = [
        HouseholdReportRow(
            household_id=household_id,
            household_head_id=head_id,
            household_head_name=format_full_name(first, middle, last),
            barangay=barangay_name,
            municipality=municipality_name,
            street_address=purok,
            household_members_count=int(members or 0),
            registration_date=date_saved,
            is_printed=_printed(is_printed),
        )
        for (
            household_id,
            head_id,
            first,
            middle,
            last,
            barangay_name,
            municipality_name,
            purok,
            members,
            date_saved,
            is_printed,
        ) in result.all()
    ]
    return households, total


async def get_filter_options(session: AsyncSession, *, include_puroks: bool = True) -> FilterOptions:
    """Collect the distinct municipalities, barangays and puroks for filter pickers.

    Args:
        session: Database session.
        include_puroks: Also collect the purok list (requires a join over households).

    Returns:
        FilterOptions.
    """
    municipalities = await session.execute(
        select(Barangay.municipality).distinct().order_by(Barangay.municipality)
    )
    barangays = await session.execute(
        select(Barangay.name, Barangay.municipality).distinct().order_by(Barangay.municipality, Barangay.name)
    )
    options = FilterOptions(
        municipalities=[MunicipalityOption(municipality=m) for (m,) in municipalities.all()],
        barangays=[BarangayOption(barangay=b, municipality=m) for b, m in barangays.all()],
    )
    if include_puroks:
        puroks = await session.execute(
            select(Household.purok, Barangay.name, Barangay.municipality)
            .distinct()
            .join(Voter, Voter.id == Household.head_voter_id)
            .join(Barangay, Barangay.id == Voter.barangay_id)
            .where(Household.purok.is_not(None), func.trim(Household.purok) != "")
            .order_by(Barangay.municipality, Barangay.name, Household.purok)
        )
        options.puroks = [PurokOption(purok_st=p, barangay=b, municipality=m) for p, b, m in puroks.all()]
    return options
