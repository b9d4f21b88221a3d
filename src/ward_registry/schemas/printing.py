"""Pydantic v2 schemas for print batches.

Print records are consumed by the print templates in camelCase; the QR
payload keys are fixed by the badge scanner.
"""

from pydantic import BaseModel, ConfigDict, Field

from ward_registry.schemas.common import CamelModel

NO_MEMBERS_NAME = "NO HOUSEHOLD MEMBERS"
# Matches the largest batch a fetch-for-print call can return.
MAX_CONFIRM_IDS = 500


class ReceivedBy(CamelModel):
    """Blank acknowledgement block filled in by hand on the printout."""

    name: str = ""
    signature: str = ""
    position: str = ""
    time_signed: str = ""


class PrintMember(CamelModel):
    name: str
    position: str
    remarks: str


class HouseholdQrData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    household_id: int = Field(alias="H_H_ID")
    household_name: str = Field(alias="HH_Name")


class PrintHouseholdRecord(CamelModel):
    household_id: int
    household_number: str
    ward_leader: str
    members: list[PrintMember]
    received_by: ReceivedBy = Field(default_factory=ReceivedBy)
    qr_data: HouseholdQrData


class PoliticsData(CamelModel):
    congressman: int | None = None
    governor: int | None = None
    vicegov: int | None = None
    mayor: int | None = None
    supported_candidates: str
    is_undecided: bool


class VotingPreference(CamelModel):
    name: str
    position: str
    remarks: str


class LeaderQrData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    leader_id: int = Field(alias="L_ID")
    leader_name: str = Field(alias="L_Name")
    voter_id: int = Field(alias="V_ID")


class PrintLeaderRecord(CamelModel):
    leader_id: int
    ward_leader_number: str
    v_id: int = Field(alias="v_id")
    name: str
    precinct: str
    barangay: str
    municipality: str
    gender: str
    birthday: str
    election_year: int | str
    politics_data: PoliticsData | None = None
    voting_preference: VotingPreference
    received_by: ReceivedBy = Field(default_factory=ReceivedBy)
    qr_data: LeaderQrData


class HouseholdPrintBatchResponse(BaseModel):
    data: list[PrintHouseholdRecord]


class LeaderPrintBatchResponse(BaseModel):
    data: list[PrintLeaderRecord]


class MarkHouseholdsPrintedRequest(CamelModel):
    household_ids: list[int] = Field(
        min_length=1, max_length=MAX_CONFIRM_IDS, description="Household ids taken from the fetch response"
    )


class MarkLeadersPrintedRequest(CamelModel):
    leader_ids: list[int] = Field(
        min_length=1, max_length=MAX_CONFIRM_IDS, description="Leader record ids taken from the fetch response"
    )


class PrintConfirmation(CamelModel):
    """Outcome of a confirm-print call.

    ``unresolved_ids`` lists requested ids that are still not printed,
    either because they do not exist or fall outside the batch scope.
    """

    requested_count: int
    updated_count: int
    unresolved_ids: list[int] = Field(default_factory=list)


class PrintConfirmationResponse(BaseModel):
    message: str
    data: PrintConfirmation
