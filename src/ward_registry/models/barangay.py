"""Barangay model: the smallest administrative unit a voter belongs to."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ward_registry.models.base import Base


class Barangay(Base):
    """Barangay with its municipality, district and household quota."""

    __tablename__ = "barangays"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column("barangay", String(45), nullable=True, index=True)
    municipality: Mapped[str | None] = mapped_column(String(45), nullable=True, index=True)
    district: Mapped[int | None] = mapped_column(Integer, nullable=True)
    household_quota: Mapped[int | None] = mapped_column("households", Integer, nullable=True)
