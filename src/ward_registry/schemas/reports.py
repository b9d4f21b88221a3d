"""Pydantic v2 schemas for the hierarchy reports."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from ward_registry.schemas.common import CamelModel, FilterOptions, PaginationMeta

HEAD_ROLE = "Head"
MEMBER_ROLE = "Member"


class LeaderSummary(BaseModel):
    """One ward leader or barangay coordinator in a report listing."""

    v_id: int
    leader_id: int
    full_name: str
    barangay: str | None = None
    municipality: str | None = None
    household_count: int | None = None
    ward_leaders_count: int | None = None
    is_printed: int = Field(ge=0, le=1)


class LeaderListResponse(CamelModel):
    data: list[LeaderSummary]
    total: int
    page: int
    limit: int
    total_pages: int
    filter_options: FilterOptions


class LeaderDetailResponse(BaseModel):
    data: LeaderSummary


class HouseholdHead(BaseModel):
    """A household as listed under its ward leader."""

    household_id: int
    household_head_id: int | None
    household_head_name: str
    location: str | None = None
    municipality: str | None = None
    street_address: str | None = None
    household_members_count: int = 0
    leader_name: str | None = None
    registration_date: datetime | None = None
    is_printed: int = Field(ge=0, le=1)


class HouseholdHeadListResponse(BaseModel):
    data: list[HouseholdHead]


class HouseholdMemberRow(BaseModel):
    """A member of a household; the head is always listed first."""

    member_record_id: int | None
    household_head_id: int | None
    household_head_name: str
    member_id: int | None
    member_name: str
    gender: str | None = None
    birthdate: date | None = None
    age: int | None = None
    precinct_no: str | None = None
    barangay: str | None = None
    municipality: str | None = None
    street_address: str | None = None
    registration_date: datetime | None = None
    is_printed: int = Field(ge=0, le=1)
    household_role: str
    remarks: str


class HouseholdMemberListResponse(BaseModel):
    data: list[HouseholdMemberRow]


class CoordinatorWardLeader(BaseModel):
    """A ward leader working in a barangay coordinator's barangay."""

    v_id: int
    name: str
    assigned_area: str
    households_count: int = 0
    members_count: int = 0
    contact_number: str | None = None
    last_updated: str
    is_printed: int = Field(ge=0, le=1)


class CoordinatorWardLeaderListResponse(BaseModel):
    data: list[CoordinatorWardLeader]


class HouseholdReportRow(BaseModel):
    """A household in the paginated households report."""

    household_id: int
    household_head_id: int | None
    household_head_name: str
    barangay: str | None = None
    municipality: str | None = None
    street_address: str | None = None
    household_members_count: int = 0
    registration_date: datetime | None = None
    is_printed: int = Field(ge=0, le=1)


class HouseholdReportResponse(CamelModel):
    data: list[HouseholdReportRow]
    meta: PaginationMeta
    filter_options: FilterOptions


class PrintStatusUpdate(BaseModel):
    """Administrative print-status change for a ward leader."""

    is_printed: int = Field(ge=0, le=1, description="1 = printed, 0 = not printed")


class PrintStatusResponse(BaseModel):
    message: str
    data: LeaderSummary
