"""Parameterized filter expressions for report queries."""

from ward_registry.lib.filters.expressions import (
    AnyOf,
    Equals,
    FilterExpr,
    In,
    Like,
    compile_filter,
    compile_filters,
    normalize_filter_value,
)

__all__ = [
    "AnyOf",
    "Equals",
    "FilterExpr",
    "In",
    "Like",
    "compile_filter",
    "compile_filters",
    "normalize_filter_value",
]
