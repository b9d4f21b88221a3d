"""Voter model mapped onto the legacy ``v_info`` table."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from ward_registry.models.base import Base

# record_type value of a voter with a complete, verified record
RECORD_TYPE_REGISTERED = 1


class Voter(Base):
    """Individual voter.

    ``barangay_id`` is a weak reference: the legacy table carries no
    foreign key, so a voter may point at a barangay that does not exist.
    """

    __tablename__ = "v_info"

    id: Mapped[int] = mapped_column("v_id", Integer, primary_key=True, autoincrement=True)
    barangay_id: Mapped[int | None] = mapped_column("barangayId", Integer, nullable=True, index=True)
    precinct_no: Mapped[str | None] = mapped_column("v_precinct_no", String(45), nullable=True)
    last_name: Mapped[str | None] = mapped_column("v_lname", String(145), nullable=True, index=True)
    first_name: Mapped[str | None] = mapped_column("v_fname", String(145), nullable=True)
    middle_name: Mapped[str | None] = mapped_column("v_mname", String(45), nullable=True)
    birthday: Mapped[date | None] = mapped_column("v_birthday", Date, nullable=True)
    gender: Mapped[str | None] = mapped_column("v_gender", String(15), nullable=True)
    record_type: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    external_idx: Mapped[str] = mapped_column("v_idx", String(45), nullable=False, default="")
    mobile_phone: Mapped[str | None] = mapped_column("v_mobile_phone", String(45), nullable=True)
    date_recorded: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
