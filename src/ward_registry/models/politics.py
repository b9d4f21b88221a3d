"""Recorded candidate preferences per voter."""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from ward_registry.models.base import Base


class PoliticsPreference(Base):
    """One row per voter with nullable candidate IDs per office."""

    __tablename__ = "politics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voter_id: Mapped[int | None] = mapped_column("v_id", Integer, nullable=True, index=True)
    congressman: Mapped[int | None] = mapped_column(Integer, nullable=True)
    governor: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vice_governor: Mapped[int | None] = mapped_column("vicegov", Integer, nullable=True)
    mayor: Mapped[int | None] = mapped_column(Integer, nullable=True)
    op: Mapped[int | None] = mapped_column(Integer, nullable=True)
    na: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[int | None] = mapped_column(Integer, nullable=True)
