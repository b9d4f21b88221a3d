"""Voting-preference library: sentinel rules and remark classification."""

from ward_registry.lib.preferences.classifier import classify_preference, is_all_undecided
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

__all__ = [
    "NO_DATA",
    "NO_PREFERENCE",
    "STRAIGHT",
    "UNDECIDED",
    "UNDECIDED_ALL",
    "CandidateDirectory",
    "PreferenceRecord",
    "PreferenceSentinels",
    "classify_preference",
    "is_all_undecided",
]
