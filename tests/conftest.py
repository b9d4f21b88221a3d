"""Shared test fixtures for async database, sessions, seeded registry data, and auth tokens."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import date, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ward_registry.core.config import Settings
from ward_registry.core.security import create_access_token
from ward_registry.models import (
    Barangay,
    Base,
    Congressman,
    Governor,
    Household,
    HouseholdMember,
    Leader,
    PoliticsPreference,
    User,
    ViceGovernor,
    Voter,
)


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key="test-secret-key-not-for-production",
        jwt_algorithm="HS256",
        election_year=2025,
        _env_file=None,
    )


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    async with session_factory() as session:
        yield session


@dataclass(frozen=True)
class Registry:
    """Well-known ids of the seeded registry."""

    ward_leader_voter: int = 500
    idle_leader_voter: int = 501
    far_leader_voter: int = 502
    coordinator_voter: int = 600
    unregistered_coordinator_voter: int = 601
    current_leader_id: int = 2
    far_leader_id: int = 5
    coordinator_leader_id: int = 6
    households: tuple[int, ...] = (10, 11, 12)
    far_household: int = 13


def _voter(voter_id: int, barangay_id: int | None, first: str, last: str, **extra: object) -> Voter:
    return Voter(
        id=voter_id,
        barangay_id=barangay_id,
        first_name=first,
        last_name=last,
        record_type=extra.pop("record_type", 1),
        external_idx=f"IDX-{voter_id}",
        **extra,
    )


@pytest.fixture
async def registry(async_session: AsyncSession) -> Registry:
    """Seed two municipalities with ward leaders, coordinators, households and preferences.

    Alpha Town / Poblacion:
        ward leader 500 (three dated rows; row 2 is current) with households 10, 11, 12
        ward leader 501 without households
        coordinator 600, coordinator 601 (not a registered voter)
    Beta City / Mabini:
        ward leader 502 with household 13
    """
    async_session.add_all(
        [
            Barangay(id=1, name="Poblacion", municipality="Alpha Town", district=1, household_quota=40),
            Barangay(id=2, name="San Isidro", municipality="Alpha Town", district=1, household_quota=25),
            Barangay(id=3, name="Mabini", municipality="Beta City", district=2, household_quota=30),
        ]
    )
    async_session.add_all(
        [
            _voter(500, 1, "Juan", "Cruz", middle_name="Santos", precinct_no="0012A", gender="M",
                   birthday=date(1970, 3, 9), mobile_phone="09170000500"),
            _voter(501, 1, "Maria", "Reyes"),
            _voter(502, 3, "Pedro", "Garcia"),
            _voter(600, 1, "Ana", "Dela Paz", gender="F"),
            _voter(601, 1, "Lito", "Ramos", record_type=2),
            _voter(700, 1, "Alma", "Bautista", gender="F", birthday=date(1985, 7, 1)),
            _voter(701, 1, "Ben", "Castro"),
            _voter(702, 1, "Carla", "Diaz"),
            _voter(703, 3, "Dan", "Evangelista"),
            _voter(800, 1, "Zed", "Aquino"),
            _voter(801, 1, "Abe", "Aquino"),
        ]
    )
    async_session.add_all(
        [
            Leader(id=1, voter_id=500, type=1, election_year=2025, date_added=datetime(2024, 1, 1)),
            Leader(id=2, voter_id=500, type=1, election_year=2025, date_added=datetime(2024, 6, 1)),
            Leader(id=3, voter_id=500, type=1, election_year=2025, date_added=datetime(2024, 3, 1)),
            Leader(id=4, voter_id=501, type=1, election_year=2025, date_added=datetime(2024, 2, 1)),
            Leader(id=5, voter_id=502, type=1, election_year=2025, date_added=datetime(2024, 2, 1)),
            Leader(id=6, voter_id=600, type=2, election_year=2025, date_added=datetime(2024, 1, 15)),
            Leader(id=7, voter_id=601, type=2, election_year=2025, date_added=datetime(2024, 1, 15)),
        ]
    )
    async_session.add_all(
        [
            Household(id=10, head_voter_id=700, leader_voter_id=500, purok="Purok 1",
                      date_saved=datetime(2024, 7, 1)),
            Household(id=11, head_voter_id=701, leader_voter_id=500, purok="Purok 2",
                      date_saved=datetime(2024, 7, 2)),
            Household(id=12, head_voter_id=702, leader_voter_id=500, purok="Purok 1",
                      date_saved=datetime(2024, 7, 3)),
            Household(id=13, head_voter_id=703, leader_voter_id=502, purok="Purok 3",
                      date_saved=datetime(2024, 7, 4)),
        ]
    )
    async_session.add_all(
        [
            HouseholdMember(id=1, head_voter_id=700, member_voter_id=700),
            HouseholdMember(id=2, head_voter_id=700, member_voter_id=800),
            HouseholdMember(id=3, head_voter_id=700, member_voter_id=801),
            HouseholdMember(id=4, head_voter_id=701, member_voter_id=701),
            HouseholdMember(id=5, head_voter_id=703, member_voter_id=703),
        ]
    )
    async_session.add_all(
        [
            Congressman(id=1, first_name="Rico", last_name="Alvarez"),
            Congressman(id=660, first_name="Tess", last_name="Lim"),
            Governor(id=662, first_name="Noel", last_name="Tan"),
            ViceGovernor(id=676, first_name="Gina", last_name="Uy"),
            PoliticsPreference(id=1, voter_id=700, congressman=1, governor=None, vice_governor=681),
            PoliticsPreference(id=2, voter_id=500, congressman=660, governor=662, vice_governor=676),
            PoliticsPreference(id=3, voter_id=800, congressman=679, governor=680, vice_governor=681),
        ]
    )
    async_session.add(User(id=1, username="testadmin", role="admin"))
    await async_session.commit()
    async_session.expunge_all()
    return Registry()


@pytest.fixture
def admin_token(settings: Settings) -> str:
    """Generate a JWT access token for an admin user."""
    return create_access_token(
        subject="testadmin",
        role="admin",
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


@pytest.fixture
def viewer_token(settings: Settings) -> str:
    """Generate a JWT access token for a viewer user."""
    return create_access_token(
        subject="testviewer",
        role="viewer",
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
