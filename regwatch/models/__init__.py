"""Core data structures for regwatch."""

from regwatch.models.config import RegwatchConfig
from regwatch.models.events import Outcome, SkipReason
from regwatch.models.report import ChangeRecord, PassResult, SkippedEntity
from regwatch.models.snapshot import Address, CompanySnapshot
from regwatch.models.state import StateRecord
from regwatch.models.watch import WatchEntry

__all__ = [
    "Address",
    "ChangeRecord",
    "CompanySnapshot",
    "Outcome",
    "PassResult",
    "RegwatchConfig",
    "SkipReason",
    "SkippedEntity",
    "StateRecord",
    "WatchEntry",
]
