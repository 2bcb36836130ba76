"""Pass outcome enumerations."""

from __future__ import annotations

from enum import StrEnum


class Outcome(StrEnum):
    """Classification of one watched entity within a pass."""

    BASELINE = "baseline"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


class SkipReason(StrEnum):
    """Why an entity was left out of a pass without failing it."""

    INVALID_KEY = "invalid_key"
    NOT_FOUND = "not_found"
    NULL_KEY = "null_key"
