"""Household and household-member models."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from ward_registry.models.base import Base


class Household(Base):
    """A household headed by one voter and assigned to a ward leader.

    ``is_printed`` only moves from False to True through a confirmed print
    batch; clearing it is an administrative action.
    """

    __tablename__ = "head_household"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    head_voter_id: Mapped[int | None] = mapped_column("fh_v_id", Integer, nullable=True, index=True)
    date_saved: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    leader_voter_id: Mapped[int | None] = mapped_column("leader_v_id", Integer, nullable=True, index=True)
    purok: Mapped[str | None] = mapped_column("purok_st", String(245), nullable=True)
    verification_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_printed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    is_received: Mapped[int] = mapped_column("is_Received", Integer, nullable=False, default=0, server_default="0")


class HouseholdMember(Base):
    """Join row linking a household head voter to a member voter.

    The head itself appears as a row whose member id equals the head id.
    """

    __tablename__ = "household_warding"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    head_voter_id: Mapped[int | None] = mapped_column("fh_v_id", Integer, nullable=True, index=True)
    member_voter_id: Mapped[int | None] = mapped_column("mem_v_id", Integer, nullable=True, index=True)
    date_saved: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
