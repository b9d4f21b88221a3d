"""Preference service: batched loading of preferences and candidate names."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ward_registry.lib.preferences import CandidateDirectory, PreferenceRecord
from ward_registry.models.candidate import Congressman, Governor, Mayor, ViceGovernor
from ward_registry.models.politics import PoliticsPreference


CandidateModel = type[Congressman] | type[Governor] | type[ViceGovernor] | type[Mayor]


async def _surnames(session: AsyncSession, model: CandidateModel) -> dict[int, str | None]:
    result = await session.execute(select(model.id, model.last_name))
    return {candidate_id: last_name for candidate_id, last_name in result.all()}


async def load_candidate_directory(session: AsyncSession) -> CandidateDirectory:
    """Load every candidate table into an in-memory surname directory.

    Args:
        session: Database session.

    Returns:
        CandidateDirectory with one lookup per office.
    """
    return CandidateDirectory(
        congressmen=await _surnames(session, Congressman),
        governors=await _surnames(session, Governor),
        vice_governors=await _surnames(session, ViceGovernor),
        mayors=await _surnames(session, Mayor),
    )


def to_preference_record(row: PoliticsPreference) -> PreferenceRecord:
    return PreferenceRecord(
        voter_id=row.voter_id or 0,
        congressman=row.congressman,
        governor=row.governor,
        vice_governor=row.vice_governor,
        mayor=row.mayor,
    )


async def load_preferences(session: AsyncSession, voter_ids: Iterable[int]) -> dict[int, PreferenceRecord]:
    """Load the preference rows of a set of voters in one query.

    When a voter has more than one row the one with the highest id wins.

    Args:
        session: Database session.
        voter_ids: Voter ids to look up.

    Returns:
        Mapping of voter id to its preference record. Voters without a
        row are absent.
    """
    ids = sorted({voter_id for voter_id in voter_ids if voter_id is not None})
    if not ids:
        return {}
    result = await session.execute(
        select(PoliticsPreference).where(PoliticsPreference.voter_id.in_(ids)).order_by(PoliticsPreference.id)
    )
    return {row.voter_id: to_preference_record(row) for row in result.scalars().all() if row.voter_id is not None}
