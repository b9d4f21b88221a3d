"""Print-batch service: fetch-for-print and confirm-print.

An entity moves ``unprinted -> staged -> printed``. Fetching stages a
batch without side effects; the same filters return the same ordered
batch until it is confirmed. Confirming is a conditional bulk update
that only touches rows that are still unprinted and reports the ids
it could not resolve, so the caller can retry exactly those.
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from typing import Any

from loguru import logger
from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from ward_registry.core.logging import audit_logger
from ward_registry.lib.filters import Equals, FilterExpr, Like, compile_filters, normalize_filter_value
from ward_registry.lib.preferences import (
    CandidateDirectory,
    PreferenceRecord,
    PreferenceSentinels,
    classify_preference,
    is_all_undecided,
)
from ward_registry.lib.report_cache import PrintEntity, ReportCache
from ward_registry.models.barangay import Barangay
from ward_registry.models.household import Household, HouseholdMember
from ward_registry.models.leader import Leader, LeaderType
from ward_registry.models.voter import RECORD_TYPE_REGISTERED, Voter
from ward_registry.schemas.printing import (
    NO_MEMBERS_NAME,
    HouseholdQrData,
    LeaderQrData,
    PoliticsData,
    PrintConfirmation,
    PrintHouseholdRecord,
    PrintLeaderRecord,
    PrintMember,
    VotingPreference,
)
from ward_registry.schemas.reports import LeaderSummary
from ward_registry.services.leader_resolver import current_leader_subquery, resolve_current_leader
from ward_registry.services.preference_service import load_candidate_directory, load_preferences
from ward_registry.services.report_service import format_full_name, full_name_expr, get_leader

UNASSIGNED_LEADER = "UNASSIGNED"
HEAD_POSITION = "HH Head"
MEMBER_POSITION = "Member"

LEADER_POSITIONS = {
    LeaderType.WARD_LEADER: "WARD LEADER",
    LeaderType.BARANGAY_COORDINATOR: "BARANGAY COORDINATOR",
}

LEADER_ENTITIES = {
    LeaderType.WARD_LEADER: PrintEntity.WARD_LEADER,
    LeaderType.BARANGAY_COORDINATOR: PrintEntity.BARANGAY_COORDINATOR,
}


def clamp_limit(limit: int | None, default: int, maximum: int) -> int:
    """Bound a requested batch size to ``1..maximum``, using ``default`` when unset."""
    if limit is None or limit <= 0:
        return min(default, maximum)
    return min(limit, maximum)


def format_print_birthday(value: date | None) -> str:
    """Format a birthday as ``Mon D, YYYY`` (``N/A`` when unknown)."""
    if value is None:
        return "N/A"
    return f"{value:%b} {value.day}, {value.year}"


def format_print_name(first: str | None, middle: str | None, last: str | None) -> str:
    """Format a leader name as ``LAST, FIRST MIDDLE`` in upper case."""
    return f"{last or ''}, {first or ''} {middle or ''}".strip().upper()


# ---------------------------------------------------------------------------
# Fetch-for-print
# ---------------------------------------------------------------------------


async def fetch_households_for_print(
    session: AsyncSession,
    *,
    limit: int,
    municipality: str | None = None,
    barangay: str | None = None,
    purok: str | None = None,
    sentinels: PreferenceSentinels | None = None,
) -> list[PrintHouseholdRecord]:
    """Fetch the next batch of unprinted households, fully hydrated.

    Households are ordered by their ward leader (municipality, barangay,
    surname, given name, voter id) and then by the head's location and
    name. Only households assigned to a current ward leader qualify.

    Args:
        session: Database session.
        limit: Maximum number of households (already clamped by the caller).
        municipality: Substring filter on the ward leader's municipality.
        barangay: Substring filter on the ward leader's barangay.
        purok: Exact purok label of the household.
        sentinels: Preference sentinel configuration.

    Returns:
        Print records in print order; empty when nothing is left to print.
    """
    current = current_leader_subquery(LeaderType.WARD_LEADER)
    leader_voter = aliased(Voter)
    leader_barangay = aliased(Barangay)
    head = aliased(Voter)
    head_barangay = aliased(Barangay)

    filters: list[FilterExpr] = []
    if (value := normalize_filter_value(municipality)) is not None:
        filters.append(Like(leader_barangay.municipality, value))
    if (value := normalize_filter_value(barangay)) is not None:
        filters.append(Like(leader_barangay.name, value))
    if (value := normalize_filter_value(purok)) is not None:
        filters.append(Equals(Household.purok, value))

    query = (
        select(
            Household.id,
            Household.head_voter_id,
            head.first_name,
            head.middle_name,
            head.last_name,
            leader_voter.first_name,
            leader_voter.middle_name,
            leader_voter.last_name,
        )
        .select_from(Household)
        .join(current, current.c.voter_id == Household.leader_voter_id)
        .join(leader_voter, leader_voter.id == Household.leader_voter_id)
        .outerjoin(leader_barangay, leader_barangay.id == leader_voter.barangay_id)
        .outerjoin(head, head.id == Household.head_voter_id)
        .outerjoin(head_barangay, head_barangay.id == head.barangay_id)
        .where(Household.is_printed.is_(False), compile_filters(filters))
        .order_by(
            leader_barangay.municipality,
            leader_barangay.name,
            leader_voter.last_name,
            leader_voter.first_name,
            leader_voter.id,
            head_barangay.municipality,
            head_barangay.name,
            full_name_expr(head),
            Household.id,
        )
        .limit(limit)
    )
    households = (await session.execute(query)).all()
    if not households:
        return []

    head_ids = sorted({row[1] for row in households if row[1] is not None})
    members_by_head: dict[int, list[tuple[int, str]]] = defaultdict(list)
    if head_ids:
        member_rows = await session.execute(
            select(
                HouseholdMember.head_voter_id,
                HouseholdMember.member_voter_id,
                Voter.first_name,
                Voter.middle_name,
                Voter.last_name,
            )
            .join(Voter, Voter.id == HouseholdMember.member_voter_id)
            .where(HouseholdMember.head_voter_id.in_(head_ids))
        )
        for head_id, member_id, first, middle, last in member_rows.all():
            members_by_head[head_id].append((member_id, format_full_name(first, middle, last)))

    voter_ids = set(head_ids)
    for members in members_by_head.values():
        voter_ids.update(member_id for member_id, _ in members)
    preferences = await load_preferences(session, voter_ids)
    candidates = await load_candidate_directory(session)

    records = [
        _household_record(row, members_by_head, preferences, candidates, sentinels) for row in households
    ]
    logger.debug("Staged {} households for printing", len(records))
    return records


def _household_record(
    row: Any,
    members_by_head: dict[int, list[tuple[int, str]]],
    preferences: dict[int, PreferenceRecord],
    candidates: CandidateDirectory,
    sentinels: PreferenceSentinels | None,
) -> PrintHouseholdRecord:
    household_id, head_id, h_first, h_middle, h_last, l_first, l_middle, l_last = row
    head_name = format_full_name(h_first, h_middle, h_last)
    leader_name = format_full_name(l_first, l_middle, l_last)

    def remarks(voter_id: int | None) -> str:
        record = preferences.get(voter_id) if voter_id is not None else None
        return classify_preference(record, candidates, sentinels)

    linked = members_by_head.get(head_id, []) if head_id is not None else []
    head_entry = next(((mid, name) for mid, name in linked if mid == head_id), (head_id, head_name))
    others = sorted(
        ((mid, name) for mid, name in linked if mid != head_id), key=lambda item: (item[1].casefold(), item[1])
    )

    members = [PrintMember(name=head_entry[1].upper(), position=HEAD_POSITION, remarks=remarks(head_entry[0]))]
    members.extend(
        PrintMember(name=name.upper(), position=MEMBER_POSITION, remarks=remarks(mid)) for mid, name in others
    )
    if not others:
        members.append(PrintMember(name=NO_MEMBERS_NAME, position="-", remarks="-"))

    return PrintHouseholdRecord(
        household_id=household_id,
        household_number=str(household_id).zfill(3),
        ward_leader=leader_name or UNASSIGNED_LEADER,
        members=members,
        qr_data=HouseholdQrData(household_id=household_id, household_name=head_name),
    )


async def fetch_leaders_for_print(
    session: AsyncSession,
    role: LeaderType,
    *,
    election_year: int,
    limit: int,
    municipality: str | None = None,
    barangay: str | None = None,
    purok: str | None = None,
    sentinels: PreferenceSentinels | None = None,
) -> list[PrintLeaderRecord]:
    """Fetch the next batch of unprinted ward leaders or barangay coordinators.

    Ward leaders must have at least one household. Coordinators must be
    registered voters with an active assignment and a known barangay.

    Args:
        session: Database session.
        role: Leader type to print.
        election_year: Election year the resolved row must belong to.
        limit: Maximum number of records (already clamped by the caller).
        municipality: Exact municipality of the leader.
        barangay: Exact barangay of the leader.
        purok: Only leaders with a household on this purok.
        sentinels: Preference sentinel configuration.

    Returns:
        Print records ordered by municipality, barangay, surname, given name.
    """
    current = current_leader_subquery(role)

    filters: list[FilterExpr] = []
    if (value := normalize_filter_value(municipality)) is not None:
        filters.append(Equals(Barangay.municipality, value))
    if (value := normalize_filter_value(barangay)) is not None:
        filters.append(Equals(Barangay.name, value))

    query = (
        select(Leader, Voter, Barangay.name, Barangay.municipality)
        .select_from(Leader)
        .join(current, Leader.id == current.c.leader_id)
        .join(Voter, Voter.id == Leader.voter_id)
    )
    if role is LeaderType.BARANGAY_COORDINATOR:
        query = query.join(Barangay, Barangay.id == Voter.barangay_id).where(
            Voter.record_type == RECORD_TYPE_REGISTERED,
            Leader.status.is_(None),
        )
    else:
        query = query.outerjoin(Barangay, Barangay.id == Voter.barangay_id).where(
            exists().where(Household.leader_voter_id == Leader.voter_id),
        )
    if (value := normalize_filter_value(purok)) is not None:
        query = query.where(exists().where(Household.leader_voter_id == Leader.voter_id, Household.purok == value))

    query = (
        query.where(
            Leader.election_year == election_year,
            Leader.is_printed.is_(False),
            compile_filters(filters),
        )
        .order_by(Barangay.municipality, Barangay.name, Voter.last_name, Voter.first_name, Voter.id)
        .limit(limit)
    )
    rows = (await session.execute(query)).all()
    if not rows:
        return []

    preferences = await load_preferences(session, [voter.id for _, voter, _, _ in rows])
    candidates = await load_candidate_directory(session)

    records = []
    for leader, voter, barangay_name, municipality_name in rows:
        record = preferences.get(voter.id)
        remarks = classify_preference(record, candidates, sentinels)
        name = format_print_name(voter.first_name, voter.middle_name, voter.last_name)
        politics = None
        if record is not None:
            politics = PoliticsData(
                congressman=record.congressman,
                governor=record.governor,
                vicegov=record.vice_governor,
                mayor=record.mayor,
                supported_candidates=remarks,
                is_undecided=is_all_undecided(record),
            )
        records.append(
            PrintLeaderRecord(
                leader_id=leader.id,
                ward_leader_number=str(leader.id).zfill(3),
                v_id=voter.id,
                name=name,
                precinct=voter.precinct_no or "N/A",
                barangay=barangay_name or "N/A",
                municipality=municipality_name or "N/A",
                gender=voter.gender or "N/A",
                birthday=format_print_birthday(voter.birthday),
                election_year=leader.election_year or "N/A",
                politics_data=politics,
                voting_preference=VotingPreference(name=name, position=LEADER_POSITIONS[role], remarks=remarks),
                qr_data=LeaderQrData(leader_id=leader.id, leader_name=name, voter_id=voter.id),
            )
        )
    logger.debug("Staged {} leaders (type {}) for printing", len(records), int(role))
    return records


# ---------------------------------------------------------------------------
# Confirm-print
# ---------------------------------------------------------------------------


async def _confirm(
    session: AsyncSession,
    cache: ReportCache,
    entity: PrintEntity,
    requested: Sequence[int],
    update_stmt: Any,
    printed_query: Any,
) -> PrintConfirmation:
    result = await session.execute(update_stmt.execution_options(synchronize_session=False))
    updated = max(result.rowcount or 0, 0)
    printed_ids = set((await session.execute(printed_query)).scalars().all())
    await session.commit()

    unresolved = [item_id for item_id in requested if item_id not in printed_ids]
    confirmation = PrintConfirmation(
        requested_count=len(requested),
        updated_count=updated,
        unresolved_ids=unresolved,
    )
    audit_logger(
        entity=entity.value,
        requested=confirmation.requested_count,
        updated=confirmation.updated_count,
        unresolved=unresolved,
    ).info("Marked {} of {} {} records as printed", confirmation.updated_count, len(requested), entity.value)
    if unresolved:
        logger.warning("{} {} ids could not be marked as printed: {}", len(unresolved), entity.value, unresolved)

    await cache.invalidate_entity(entity)
    return confirmation


async def mark_households_printed(
    session: AsyncSession,
    cache: ReportCache,
    household_ids: Sequence[int],
) -> PrintConfirmation:
    """Mark a confirmed batch of households as printed.

    Only rows that are still unprinted are updated, so an id that was
    already printed is neither counted again nor reported as an error.

    Args:
        session: Database session.
        cache: Report cache to invalidate afterwards.
        household_ids: Household ids from the fetch response.

    Returns:
        PrintConfirmation with requested/updated counts and unresolved ids.

    Raises:
        ValueError: If no ids were given.
    """
    requested = sorted(set(household_ids))
    if not requested:
        msg = "At least one household id is required"
        raise ValueError(msg)
    stmt = (
        update(Household)
        .where(Household.id.in_(requested), Household.is_printed.is_(False))
        .values(is_printed=True)
    )
    printed = select(Household.id).where(Household.id.in_(requested), Household.is_printed.is_(True))
    return await _confirm(session, cache, PrintEntity.HOUSEHOLD, requested, stmt, printed)


async def mark_leaders_printed(
    session: AsyncSession,
    cache: ReportCache,
    role: LeaderType,
    leader_ids: Sequence[int],
    *,
    election_year: int,
) -> PrintConfirmation:
    """Mark a confirmed batch of leader records as printed.

    Args:
        session: Database session.
        cache: Report cache to invalidate afterwards.
        role: Leader type; rows of another type are left untouched.
        leader_ids: Leader record (surrogate) ids from the fetch response.
        election_year: Only rows of this election year are updated.

    Returns:
        PrintConfirmation with requested/updated counts and unresolved ids.

    Raises:
        ValueError: If no ids were given.
    """
    requested = sorted(set(leader_ids))
    if not requested:
        msg = "At least one leader id is required"
        raise ValueError(msg)
    scope = (Leader.id.in_(requested), Leader.type == int(role), Leader.election_year == election_year)
    stmt = update(Leader).where(*scope, Leader.is_printed.is_(False)).values(is_printed=True)
    printed = select(Leader.id).where(*scope, Leader.is_printed.is_(True))
    return await _confirm(session, cache, LEADER_ENTITIES[role], requested, stmt, printed)


async def update_leader_print_status(
    session: AsyncSession,
    cache: ReportCache,
    voter_id: int,
    is_printed: bool,
) -> LeaderSummary | None:
    """Set a ward leader's printed flag; the only path that can clear it.

    Args:
        session: Database session.
        cache: Report cache to invalidate afterwards.
        voter_id: The ward leader's voter id.
        is_printed: New flag value.

    Returns:
        The updated leader summary, or None if the voter is not a ward leader.
    """
    current = await resolve_current_leader(session, LeaderType.WARD_LEADER, voter_id)
    if current is None:
        return None

    await session.execute(
        update(Leader)
        .where(Leader.voter_id == voter_id, Leader.type == int(LeaderType.WARD_LEADER))
        .values(is_printed=is_printed)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    audit_logger(entity=PrintEntity.WARD_LEADER.value, voter_id=voter_id, is_printed=is_printed).info(
        "Ward leader {} print status set to {}", voter_id, "printed" if is_printed else "not printed"
    )

    await cache.invalidate_entity(PrintEntity.WARD_LEADER)
    return await get_leader(session, LeaderType.WARD_LEADER, voter_id)
