"""Filter expressions compiled to parameterized SQLAlchemy clauses.

Report and print queries describe their WHERE conditions as a list of
small tagged values instead of concatenated SQL text. Every value ends
up as a bound parameter.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, and_, false, or_, true

_ALL_TOKENS = frozenset({"", "all"})


@dataclass(frozen=True)
class Equals:
    """Exact match: ``column = value``."""

    column: ColumnElement[Any]
    value: Any


@dataclass(frozen=True)
class Like:
    """Case-insensitive substring match: ``column ILIKE '%value%'``."""

    column: ColumnElement[Any]
    value: str


@dataclass(frozen=True)
class In:
    """Membership: ``column IN (values)``. An empty list matches nothing."""

    column: ColumnElement[Any]
    values: Sequence[Any]


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of other expressions."""

    expressions: Sequence["FilterExpr"]


FilterExpr = Equals | Like | In | AnyOf


def normalize_filter_value(value: str | None) -> str | None:
    """Strip a raw query value; blank and ``all`` mean "no filter".

    Args:
        value: Raw value from the query string.

    Returns:
        The stripped value, or None if the filter should not be applied.
    """
    if value is None:
        return None
    text = value.strip()
    if text.lower() in _ALL_TOKENS:
        return None
    return text


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_filter(expr: FilterExpr) -> ColumnElement[bool]:
    """Compile one filter expression into a SQLAlchemy boolean clause."""
    if isinstance(expr, Equals):
        return expr.column == expr.value
    if isinstance(expr, Like):
        return expr.column.ilike(f"%{_escape_like(expr.value)}%", escape="\\")
    if isinstance(expr, In):
        if not expr.values:
            return false()
        return expr.column.in_(list(expr.values))
    if isinstance(expr, AnyOf):
        if not expr.expressions:
            return false()
        return or_(*(compile_filter(e) for e in expr.expressions))
    msg = f"Unsupported filter expression: {type(expr).__name__}"
    raise TypeError(msg)


def compile_filters(exprs: Iterable[FilterExpr]) -> ColumnElement[bool]:
    """AND together a list of filter expressions (empty list -> TRUE)."""
    clauses = [compile_filter(e) for e in exprs]
    if not clauses:
        return true()
    return and_(*clauses)
