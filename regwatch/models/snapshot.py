"""Normalized company snapshot schema.

A snapshot is the subset of a registry record that regwatch tracks.  It is
produced by the registry collaborator and consumed as a plain JSON-like
mapping (``to_dict``) by the fingerprint, diff and state store.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any


@dataclass(frozen=True)
class Address:
    """Postal address of a registered company."""

    organisation: str | None = None
    care_of: str | None = None
    street: str | None = None
    house_number: str | None = None
    addon: str | None = None
    po_box: str | None = None
    city: str | None = None
    swiss_zip_code: str | None = None


@dataclass(frozen=True)
class CompanySnapshot:
    """Tracked fields of one registry entity.

    ``uid`` is the entity key.  The registry may return a record without a
    usable identifier, in which case ``uid`` is None and the reconciler
    skips the entity.
    """

    uid: str | None = None
    name: str | None = None
    legal_seat: str | None = None
    legal_form: str | None = None
    status: str | None = None
    purpose: str | None = None
    canton: str | None = None
    capital_nominal: str | None = None
    capital_currency: str | None = None
    address: Address = field(default_factory=Address)
    detail_url: str | None = field(default=None, metadata={"key": "zefixDetailWeb"})

    @property
    def key(self) -> str | None:
        return self.uid

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-like mapping that is fingerprinted, diffed and stored.

        Keys use the registry's camelCase field names (``legalSeat``,
        ``address.houseNumber``, ``zefixDetailWeb`` for the detail URL), so
        fingerprints of unchanged companies match records written by earlier
        versions of the watcher.
        """
        return _as_record(self)


def _as_record(obj: Any) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if is_dataclass(value):
            value = _as_record(value)
        record[f.metadata.get("key", _camel(f.name))] = value
    return record


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
