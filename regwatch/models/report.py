"""Per-pass results produced by the reconciler."""

from __future__ import annotations

from dataclasses import dataclass, field

from regwatch.models.events import SkipReason
from regwatch.models.state import StateRecord


@dataclass(frozen=True)
class ChangeRecord:
    """An entity whose fingerprint changed since the previous pass."""

    key: str
    label: str | None = None
    detail_url: str | None = None
    field_diffs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SkippedEntity:
    """An entity that was left out of the pass."""

    key: str
    reason: SkipReason


@dataclass
class PassResult:
    """Everything one reconcile pass produced.

    ``state`` is the complete mapping to persist, including entries for
    keys that were not part of this pass.
    """

    run_at: str
    state: dict[str, StateRecord] = field(default_factory=dict)
    changes: list[ChangeRecord] = field(default_factory=list)
    baselined: list[str] = field(default_factory=list)
    checked: list[str] = field(default_factory=list)
    skipped: list[SkippedEntity] = field(default_factory=list)
