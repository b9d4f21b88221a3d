"""Pydantic v2 schemas for print statistics."""

from pydantic import BaseModel

from ward_registry.schemas.common import CamelModel, FilterOptions


class PrintCounts(BaseModel):
    """Printed / not-printed / total counts for one entity class."""

    printed: int = 0
    not_printed: int = 0
    total: int = 0


class BarangayPrintCounts(PrintCounts):
    percentage: int = 0


class PrintStatistics(CamelModel):
    households: PrintCounts
    ward_leaders: PrintCounts
    coordinators: PrintCounts


class PrintStatisticsResponse(CamelModel):
    data: PrintStatistics
    filter_options: FilterOptions


class BarangayPrintStatistics(CamelModel):
    barangay: str | None
    households: BarangayPrintCounts
    ward_leaders: BarangayPrintCounts
    coordinators: BarangayPrintCounts


class BarangayPrintStatisticsResponse(BaseModel):
    data: list[BarangayPrintStatistics]


class WardLeaderStatisticsResponse(BaseModel):
    data: PrintCounts
