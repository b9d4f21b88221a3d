"""Read-only candidate lookup tables, one per office."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ward_registry.models.base import Base


class CandidateMixin:
    """Columns shared by every candidate table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str | None] = mapped_column("FirstName", String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column("LastName", String(255), nullable=True)


class Congressman(Base, CandidateMixin):
    __tablename__ = "congressman"


class Governor(Base, CandidateMixin):
    __tablename__ = "governor"


class ViceGovernor(Base, CandidateMixin):
    __tablename__ = "vice_governor"


class Mayor(Base, CandidateMixin):
    __tablename__ = "mayor"
