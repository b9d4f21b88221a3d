"""Common Pydantic v2 schemas shared across the API.

Provides the camelCase base model, filter options, pagination metadata
and the error response body.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for payloads exchanged with the print UI in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MunicipalityOption(BaseModel):
    municipality: str | None


class BarangayOption(BaseModel):
    barangay: str | None
    municipality: str | None


class PurokOption(BaseModel):
    purok_st: str | None
    barangay: str | None
    municipality: str | None


class FilterOptions(BaseModel):
    """Distinct location values the report filters can take."""

    municipalities: list[MunicipalityOption] = Field(default_factory=list)
    barangays: list[BarangayOption] = Field(default_factory=list)
    puroks: list[PurokOption] = Field(default_factory=list)


class PaginationMeta(CamelModel):
    """Pagination metadata included in paginated responses."""

    total: int = Field(description="Total number of items")
    page: int = Field(description="Current page number")
    limit: int = Field(description="Items per page")
    total_pages: int = Field(description="Total number of pages")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error message")


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items ``limit`` at a time."""
    if total <= 0 or limit <= 0:
        return 0
    return (total + limit - 1) // limit
