"""Data types for voting-preference classification."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

NO_DATA = "NO DATA"
UNDECIDED_ALL = "UNDECIDED(ALL 3)"
STRAIGHT = "STRAIGHT"
UNDECIDED = "UNDECIDED"
NO_PREFERENCE = "NO PREFERENCE"


@dataclass(frozen=True)
class PreferenceSentinels:
    """Reserved candidate IDs for one election cycle.

    Both triples are ordered (congressman, governor, vice governor).
    """

    undecided: tuple[int, int, int] = (679, 680, 681)
    straight: tuple[int, int, int] = (660, 662, 676)
    cycle: str = "2025"


@dataclass(frozen=True)
class PreferenceRecord:
    """Raw candidate IDs recorded for one voter.

    Values are kept as stored; a value may be ``None``, ``0`` or
    something that is not an integer at all.
    """

    voter_id: int
    congressman: Any = None
    governor: Any = None
    vice_governor: Any = None
    mayor: Any = None


@dataclass(frozen=True)
class CandidateDirectory:
    """Candidate ID to surname lookups, one mapping per office."""

    congressmen: Mapping[int, str | None] = field(default_factory=dict)
    governors: Mapping[int, str | None] = field(default_factory=dict)
    vice_governors: Mapping[int, str | None] = field(default_factory=dict)
    mayors: Mapping[int, str | None] = field(default_factory=dict)
