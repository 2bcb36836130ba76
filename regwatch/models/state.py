"""Persisted per-entity state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StateRecord:
    """Last known fingerprint and snapshot of one entity.

    Created on the first successful observation (baseline) and overwritten
    on every later one.  ``updated_at`` is an ISO-8601 UTC timestamp.
    """

    fingerprint: str
    updated_at: str
    snapshot: dict[str, Any] = field(default_factory=dict)
    display_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "fingerprint": self.fingerprint,
            "snapshot": self.snapshot,
            "updatedAt": self.updated_at,
        }
        if self.display_name is not None:
            data["displayName"] = self.display_name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StateRecord:
        """Build a record from its persisted form.

        Also accepts the older ``{hash, updatedAt, name, props}`` layout;
        records without a stored snapshot diff against an empty one.
        """
        fingerprint = data.get("fingerprint", data.get("hash"))
        if not isinstance(fingerprint, str) or not fingerprint:
            raise ValueError("state record has no fingerprint")
        snapshot = data.get("snapshot", data.get("props")) or {}
        if not isinstance(snapshot, dict):
            raise ValueError("state record snapshot must be an object")
        return cls(
            fingerprint=fingerprint,
            updated_at=str(data.get("updatedAt", "")),
            snapshot=snapshot,
            display_name=data.get("displayName", data.get("name")),
        )
