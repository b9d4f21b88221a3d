"""Tests for the hierarchy report service against a seeded in-memory database."""

from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import Registry
from ward_registry.lib.preferences import NO_DATA, UNDECIDED_ALL
from ward_registry.models import HouseholdMember, Leader, LeaderType, Voter
from ward_registry.schemas.reports import HEAD_ROLE, MEMBER_ROLE
from ward_registry.services.report_service import (
    format_full_name,
    get_filter_options,
    get_leader,
    list_coordinators,
    list_households,
    list_households_for_leader,
    list_leaders,
    list_leaders_for_coordinator,
    list_members_for_household,
)


class TestFormatFullName:
    def test_skips_blank_parts(self) -> None:
        assert format_full_name("Juan", None, "Cruz") == "Juan Cruz"
        assert format_full_name(" Juan ", "  ", "Cruz") == "Juan Cruz"
        assert format_full_name(None, None, None) == ""


class TestListLeaders:
    async def test_ward_leaders(self, async_session: AsyncSession, registry: Registry) -> None:
        leaders, total = await list_leaders(async_session, LeaderType.WARD_LEADER, election_year=2025)
        assert total == 3
        assert [(row.v_id, row.household_count) for row in leaders] == [(500, 3), (501, 0), (502, 1)]

    async def test_one_row_per_voter_from_latest_record(self, async_session: AsyncSession, registry: Registry) -> None:
        leaders, _ = await list_leaders(async_session, LeaderType.WARD_LEADER, election_year=2025, name="Cruz")
        assert len(leaders) == 1
        assert leaders[0].leader_id == registry.current_leader_id
        assert leaders[0].full_name == "Juan Santos Cruz"
        assert leaders[0].barangay == "Poblacion"
        assert leaders[0].municipality == "Alpha Town"
        assert leaders[0].is_printed == 0

    async def test_municipality_substring(self, async_session: AsyncSession, registry: Registry) -> None:
        leaders, total = await list_leaders(
            async_session, LeaderType.WARD_LEADER, election_year=2025, municipality="beta"
        )
        assert total == 1
        assert [row.v_id for row in leaders] == [502]

    @pytest.mark.parametrize("name", ["santos", "Juan Santos Cruz", "CRUZ"])
    async def test_name_matches_any_part_or_full_name(
        self, async_session: AsyncSession, registry: Registry, name: str
    ) -> None:
        leaders, _ = await list_leaders(async_session, LeaderType.WARD_LEADER, election_year=2025, name=name)
        assert [row.v_id for row in leaders] == [500]

    async def test_all_means_no_filter(self, async_session: AsyncSession, registry: Registry) -> None:
        _, total = await list_leaders(
            async_session, LeaderType.WARD_LEADER, election_year=2025, municipality="all", barangay=" "
        )
        assert total == 3

    async def test_pagination(self, async_session: AsyncSession, registry: Registry) -> None:
        leaders, total = await list_leaders(
            async_session, LeaderType.WARD_LEADER, election_year=2025, page=2, page_size=2
        )
        assert total == 3
        assert [row.v_id for row in leaders] == [502]

    async def test_other_election_year(self, async_session: AsyncSession, registry: Registry) -> None:
        leaders, total = await list_leaders(async_session, LeaderType.WARD_LEADER, election_year=2028)
        assert leaders == []
        assert total == 0

    async def test_coordinators(self, async_session: AsyncSession, registry: Registry) -> None:
        coordinators, total = await list_coordinators(async_session, election_year=2025)
        assert total == 1
        assert coordinators[0].v_id == registry.coordinator_voter
        assert coordinators[0].ward_leaders_count == 2
        assert coordinators[0].household_count is None

    async def test_inactive_coordinator_excluded(self, async_session: AsyncSession, registry: Registry) -> None:
        leader = await async_session.get(Leader, registry.coordinator_leader_id)
        assert leader is not None
        leader.status = 1
        await async_session.commit()
        coordinators, total = await list_coordinators(async_session, election_year=2025)
        assert coordinators == []
        assert total == 0


class TestGetLeader:
    async def test_ward_leader(self, async_session: AsyncSession, registry: Registry) -> None:
        leader = await get_leader(async_session, LeaderType.WARD_LEADER, 500)
        assert leader is not None
        assert leader.leader_id == 2
        assert leader.household_count == 3

    async def test_wrong_role(self, async_session: AsyncSession, registry: Registry) -> None:
        assert await get_leader(async_session, LeaderType.WARD_LEADER, 600) is None

    async def test_unregistered_coordinator(self, async_session: AsyncSession, registry: Registry) -> None:
        assert await get_leader(async_session, LeaderType.BARANGAY_COORDINATOR, 601) is None


class TestListHouseholdsForLeader:
    async def test_households(self, async_session: AsyncSession, registry: Registry) -> None:
        rows = await list_households_for_leader(async_session, 500)
        assert [row.household_id for row in rows] == [10, 11, 12]
        assert [row.household_members_count for row in rows] == [3, 1, 0]
        assert rows[0].household_head_name == "Alma Bautista"
        assert rows[0].leader_name == "Juan Santos Cruz"
        assert rows[0].location == "Poblacion"
        assert rows[0].street_address == "Purok 1"
        assert rows[0].registration_date == datetime(2024, 7, 1)

    async def test_leader_without_households(self, async_session: AsyncSession, registry: Registry) -> None:
        assert await list_households_for_leader(async_session, 501) == []

    async def test_not_a_leader(self, async_session: AsyncSession, registry: Registry) -> None:
        assert await list_households_for_leader(async_session, 700) == []


class TestListMembersForHousehold:
    async def test_head_first_then_alphabetical(self, async_session: AsyncSession, registry: Registry) -> None:
        rows = await list_members_for_household(async_session, 10)
        assert [(row.member_id, row.household_role) for row in rows] == [
            (700, HEAD_ROLE),
            (801, MEMBER_ROLE),
            (800, MEMBER_ROLE),
        ]
        assert all(row.household_head_name == "Alma Bautista" for row in rows)

    async def test_member_order_ignores_case(self, async_session: AsyncSession, registry: Registry) -> None:
        async_session.add(Voter(id=802, barangay_id=1, first_name="bea", last_name="dela Cruz", external_idx="IDX-802"))
        async_session.add(HouseholdMember(id=20, head_voter_id=700, member_voter_id=802))
        await async_session.commit()
        async_session.expunge_all()

        rows = await list_members_for_household(async_session, 10)
        assert [row.member_name for row in rows] == ["Alma Bautista", "Abe Aquino", "bea dela Cruz", "Zed Aquino"]

    async def test_remarks(self, async_session: AsyncSession, registry: Registry) -> None:
        rows = await list_members_for_household(async_session, 10)
        remarks = {row.member_id: row.remarks for row in rows}
        assert remarks == {700: "Alvarez, UNDECIDED, UNDECIDED", 801: NO_DATA, 800: UNDECIDED_ALL}

    async def test_member_details(self, async_session: AsyncSession, registry: Registry) -> None:
        head = (await list_members_for_household(async_session, 10))[0]
        assert head.gender == "F"
        assert head.birthdate is not None
        assert head.age is not None and head.age >= 39
        assert head.barangay == "Poblacion"
        assert head.municipality == "Alpha Town"
        assert head.street_address == "Purok 1"

    async def test_zero_member_rows_synthesizes_head(self, async_session: AsyncSession, registry: Registry) -> None:
        rows = await list_members_for_household(async_session, 12)
        assert len(rows) == 1
        head = rows[0]
        assert head.household_role == HEAD_ROLE
        assert head.member_name == "Carla Diaz"
        assert head.member_id == 702
        assert head.member_record_id is None
        assert head.barangay == "Poblacion"
        assert head.remarks == NO_DATA

    async def test_unknown_household(self, async_session: AsyncSession, registry: Registry) -> None:
        assert await list_members_for_household(async_session, 999) == []


class TestListLeadersForCoordinator:
    async def test_ward_leaders_in_barangay(self, async_session: AsyncSession, registry: Registry) -> None:
        rows = await list_leaders_for_coordinator(async_session, registry.coordinator_voter)
        assert rows is not None
        assert [row.v_id for row in rows] == [500, 501]
        first = rows[0]
        assert first.name == "Juan Santos Cruz"
        assert first.assigned_area == "Poblacion, Alpha Town"
        assert first.households_count == 3
        assert first.members_count == 4
        assert first.contact_number == "09170000500"
        assert first.last_updated == "2024-06-01 00:00:00"
        assert rows[1].households_count == 0
        assert rows[1].members_count == 0

    async def test_not_a_coordinator(self, async_session: AsyncSession, registry: Registry) -> None:
        assert await list_leaders_for_coordinator(async_session, 500) is None


class TestListHouseholds:
    async def test_default_sort_by_head_name(self, async_session: AsyncSession, registry: Registry) -> None:
        rows, total = await list_households(async_session)
        assert total == 4
        assert [row.household_id for row in rows] == [10, 11, 12, 13]

    async def test_sort_by_member_count_desc(self, async_session: AsyncSession, registry: Registry) -> None:
        rows, _ = await list_households(async_session, sort_by="household_members_count", sort_order="DESC")
        assert [row.household_id for row in rows] == [10, 11, 13, 12]

    async def test_filters(self, async_session: AsyncSession, registry: Registry) -> None:
        rows, total = await list_households(async_session, barangay="mabini")
        assert total == 1
        assert rows[0].household_head_name == "Dan Evangelista"
        rows, _ = await list_households(async_session, name="bautista")
        assert [row.household_id for row in rows] == [10]

    async def test_empty(self, async_session: AsyncSession, registry: Registry) -> None:
        assert await list_households(async_session, municipality="Gamma") == ([], 0)

    async def test_unknown_sort_column(self, async_session: AsyncSession, registry: Registry) -> None:
        with pytest.raises(ValueError, match="Unsupported sort column"):
            await list_households(async_session, sort_by="v_id; DROP TABLE v_info")

    async def test_unknown_sort_order(self, async_session: AsyncSession, registry: Registry) -> None:
        with pytest.raises(ValueError, match="Unsupported sort order"):
            await list_households(async_session, sort_order="sideways")


class TestGetFilterOptions:
    async def test_options(self, async_session: AsyncSession, registry: Registry) -> None:
        options = await get_filter_options(async_session)
        assert [m.municipality for m in options.municipalities] == ["Alpha Town", "Beta City"]
        assert [(b.barangay, b.municipality) for b in options.barangays] == [
            ("Poblacion", "Alpha Town"),
            ("San Isidro", "Alpha Town"),
            ("Mabini", "Beta City"),
        ]
        assert [(p.purok_st, p.barangay) for p in options.puroks] == [
            ("Purok 1", "Poblacion"),
            ("Purok 2", "Poblacion"),
            ("Purok 3", "Mabini"),
        ]

    async def test_without_puroks(self, async_session: AsyncSession, registry: Registry) -> None:
        options = await get_filter_options(async_session, include_puroks=False)
        assert options.puroks == []
