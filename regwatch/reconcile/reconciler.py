"""One reconcile pass over the watch list.

Entries are processed strictly in watch-list order, one registry call at a
time.  Per-entity skip conditions (inactive, invalid key, not found, no
resolved key) never abort the pass; registry I/O errors do, and nothing
from an aborted pass is returned for saving.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

import structlog

from regwatch.ledger.canonical import fingerprint
from regwatch.ledger.diff import diff_snapshots
from regwatch.models.events import Outcome, SkipReason
from regwatch.models.report import ChangeRecord, PassResult, SkippedEntity
from regwatch.models.state import StateRecord
from regwatch.models.watch import WatchEntry
from regwatch.registry.base import RegistryClient

_log = structlog.get_logger(component="reconcile")

_OUTCOME_EVENTS = {
    Outcome.BASELINE: "entity_baselined",
    Outcome.CHANGED: "entity_changed",
    Outcome.UNCHANGED: "entity_unchanged",
}


async def reconcile(
    entries: Iterable[WatchEntry],
    registry: RegistryClient,
    prior_state: Mapping[str, StateRecord],
    *,
    now: datetime | None = None,
) -> PassResult:
    """Classify every watched entity as baseline, changed or unchanged.

    ``prior_state`` is not mutated.  The returned ``PassResult.state``
    holds a record for every entity that was checked, with its fresh
    fingerprint, plus every prior record that this pass did not touch.
    """
    run_at = (now or datetime.now(tz=UTC)).isoformat()
    result = PassResult(run_at=run_at, state=dict(prior_state))

    for entry in entries:
        if entry.active is False:
            _log.debug("entity_inactive", key=entry.key)
            continue

        if not registry.is_valid_key(entry.key):
            _skip(result, entry.key, SkipReason.INVALID_KEY)
            continue

        snapshot = await registry.resolve(entry.key)
        if snapshot is None:
            _skip(result, entry.key, SkipReason.NOT_FOUND)
            continue

        key = snapshot.key
        if key is None:
            _skip(result, entry.key, SkipReason.NULL_KEY)
            continue

        label = entry.label if entry.label is not None else snapshot.name
        result.checked.append(f"{key} {label or ''}".strip())

        data = snapshot.to_dict()
        new_fp = fingerprint(data)
        prior = result.state.get(key)

        if prior is None:
            outcome = Outcome.BASELINE
            result.state[key] = StateRecord(
                fingerprint=new_fp, updated_at=run_at, snapshot=data, display_name=snapshot.name
            )
            result.baselined.append(f"{key} {label or ''}".strip())
        elif prior.fingerprint != new_fp:
            outcome = Outcome.CHANGED
            result.changes.append(
                ChangeRecord(
                    key=key,
                    label=label,
                    detail_url=snapshot.detail_url,
                    field_diffs=diff_snapshots(prior.snapshot, data),
                )
            )
            result.state[key] = StateRecord(
                fingerprint=new_fp, updated_at=run_at, snapshot=data, display_name=snapshot.name
            )
        else:
            outcome = Outcome.UNCHANGED
            result.state[key] = StateRecord(
                fingerprint=prior.fingerprint,
                updated_at=run_at,
                snapshot=prior.snapshot,
                display_name=prior.display_name,
            )

        _log.info(_OUTCOME_EVENTS[outcome], key=key, label=label, fingerprint=new_fp[:12])

    _log.info(
        "pass_completed",
        checked=len(result.checked),
        baselined=len(result.baselined),
        changed=len(result.changes),
        skipped=len(result.skipped),
    )
    return result


def _skip(result: PassResult, key: str, reason: SkipReason) -> None:
    result.skipped.append(SkippedEntity(key=key, reason=reason))
    _log.info("entity_skipped", key=key, reason=reason.value)
