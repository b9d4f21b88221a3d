"""Latest-record resolution for dated leader rows.

A voter can hold several ``leaders`` rows of the same type (one per
re-assignment). Only one of them is current: the row with the latest
``date_added``; among rows sharing that date the highest surrogate id
wins. Undated rows never take part in the comparison.
"""

from sqlalchemy import Subquery, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ward_registry.models.leader import Leader, LeaderType


def current_leader_subquery(leader_type: LeaderType, voter_id: int | None = None) -> Subquery:
    """Build a subquery yielding the surrogate id of each voter's current row.

    The result has columns ``leader_id`` and ``voter_id``. Join it to
    :class:`Leader` on ``Leader.id == sub.c.leader_id`` before applying
    any other filter; the election year in particular is checked on the
    resolved row, not during resolution.

    Args:
        leader_type: Ward leader or barangay coordinator.
        voter_id: Restrict resolution to a single voter.

    Returns:
        The resolver subquery.
    """
    latest_date = select(
        Leader.voter_id.label("voter_id"),
        func.max(Leader.date_added).label("latest_date"),
    ).where(Leader.type == int(leader_type), Leader.date_added.is_not(None))
    if voter_id is not None:
        latest_date = latest_date.where(Leader.voter_id == voter_id)
    latest = latest_date.group_by(Leader.voter_id).subquery("latest_leader_date")

    return (
        select(
            func.max(Leader.id).label("leader_id"),
            Leader.voter_id.label("voter_id"),
        )
        .join(
            latest,
            and_(
                Leader.voter_id == latest.c.voter_id,
                Leader.date_added == latest.c.latest_date,
            ),
        )
        .where(Leader.type == int(leader_type))
        .group_by(Leader.voter_id)
        .subquery("current_leader")
    )


async def resolve_current_leader(
    session: AsyncSession,
    leader_type: LeaderType,
    voter_id: int,
) -> Leader | None:
    """Return the current leader row for one voter, or None if there is none."""
    current = current_leader_subquery(leader_type, voter_id=voter_id)
    result = await session.execute(select(Leader).join(current, Leader.id == current.c.leader_id))
    return result.scalar_one_or_none()
