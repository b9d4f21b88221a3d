"""Voting-preference classifier.

Turns the raw candidate IDs of a :class:`PreferenceRecord` into the
remark string printed next to a voter's name. Every report and print
path goes through :func:`classify_preference`.
"""

from collections.abc import Mapping
from typing import Any

from ward_registry.lib.preferences.types import (
    NO_DATA,
    NO_PREFERENCE,
    STRAIGHT,
    UNDECIDED,
    UNDECIDED_ALL,
    CandidateDirectory,
    PreferenceRecord,
    PreferenceSentinels,
)


class MalformedCandidateIdError(ValueError):
    """Raised internally when a stored candidate ID is not an integer."""


def _coerce_id(value: Any) -> int | None:
    """Normalize a stored candidate ID.

    ``None`` stays ``None``; integers and integral strings become ``int``.

    Raises:
        MalformedCandidateIdError: For booleans, floats with a fraction, or other junk.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedCandidateIdError(repr(value))
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError as exc:
            raise MalformedCandidateIdError(repr(value)) from exc
    raise MalformedCandidateIdError(repr(value))


def _office_remark(value: int | None, undecided_id: int, lookup: Mapping[int, str | None]) -> str | None:
    if value == undecided_id:
        return UNDECIDED
    if value:
        if value in lookup:
            return lookup[value] or ""
        # Unknown candidate: contributes nothing
        return None
    return UNDECIDED


def is_all_undecided(record: PreferenceRecord | None) -> bool:
    """Return True when congressman, governor and vice governor are all null or zero."""
    if record is None:
        return False
    try:
        triple = (
            _coerce_id(record.congressman),
            _coerce_id(record.governor),
            _coerce_id(record.vice_governor),
        )
    except MalformedCandidateIdError:
        return False
    return not any(triple)


def classify_preference(
    record: PreferenceRecord | None,
    candidates: CandidateDirectory,
    sentinels: PreferenceSentinels | None = None,
) -> str:
    """Classify a voter's recorded preference into a remark string.

    Rules are evaluated in order:

    1. no record -> ``NO DATA``
    2. all three offices null/zero, or exactly the undecided triple -> ``UNDECIDED(ALL 3)``
    3. exactly the straight-ticket triple -> ``STRAIGHT``
    4. per office (congressman, governor, vice governor): the office's
       undecided sentinel or null/zero -> ``UNDECIDED``, a known candidate
       -> its surname, an unknown candidate -> nothing. Joined with
       ``", "``; an empty list -> ``NO PREFERENCE``.

    A candidate ID that cannot be read as an integer degrades to ``NO DATA``.

    Args:
        record: The voter's preference row, or None if the voter has none.
        candidates: Candidate surname lookups.
        sentinels: Sentinel IDs for the current cycle (defaults apply when omitted).

    Returns:
        The remark string.
    """
    if record is None:
        return NO_DATA
    sentinels = sentinels or PreferenceSentinels()

    try:
        triple = (
            _coerce_id(record.congressman),
            _coerce_id(record.governor),
            _coerce_id(record.vice_governor),
        )
    except MalformedCandidateIdError:
        return NO_DATA

    if not any(triple) or triple == sentinels.undecided:
        return UNDECIDED_ALL
    if triple == sentinels.straight:
        return STRAIGHT

    lookups = (candidates.congressmen, candidates.governors, candidates.vice_governors)
    remarks = [
        remark
        for value, undecided_id, lookup in zip(triple, sentinels.undecided, lookups, strict=True)
        if (remark := _office_remark(value, undecided_id, lookup)) is not None
    ]
    return ", ".join(remarks) if remarks else NO_PREFERENCE
