"""Leader model: a voter acting as ward leader or barangay coordinator."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, false
from sqlalchemy.orm import Mapped, mapped_column

from ward_registry.models.base import Base


class LeaderType(enum.IntEnum):
    """Leader role stored in ``leaders.type``."""

    WARD_LEADER = 1
    BARANGAY_COORDINATOR = 2


class Leader(Base):
    """Dated leader assignment.

    A voter may hold several rows per type; only the row with the latest
    ``date_added`` is current. ``status`` NULL means active.
    """

    __tablename__ = "leaders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voter_id: Mapped[int] = mapped_column("v_id", Integer, nullable=False, index=True)
    type: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    election_year: Mapped[int | None] = mapped_column("electionyear", Integer, nullable=True)
    date_added: Mapped[datetime | None] = mapped_column("dateadded", DateTime, nullable=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[int | None] = mapped_column(Integer, nullable=True)
    laynes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_printed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    is_received: Mapped[int] = mapped_column("is_Received", Integer, nullable=False, default=0, server_default="0")
