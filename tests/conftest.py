"""Shared fixtures for regwatch tests.

Provides an in-memory registry collaborator and a recording report sink so
reconcile passes can be exercised without network access.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from regwatch.models.snapshot import Address, CompanySnapshot
from regwatch.notifications.manager import ReportSink
from regwatch.notifications.report import Report
from regwatch.registry.base import RegistryClient, RegistryError

TS = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)


class FakeRegistry(RegistryClient):
    """Registry double backed by a dict of snapshots.

    Keys mapped to None resolve as "not found"; keys in ``invalid`` fail
    validation; keys in ``failing`` raise RegistryError.
    """

    def __init__(
        self,
        snapshots: dict[str, CompanySnapshot | None] | None = None,
        invalid: set[str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.snapshots = dict(snapshots or {})
        self.invalid = set(invalid or ())
        self.failing = set(failing or ())
        self.resolved: list[str] = []
        self.closed = False

    def is_valid_key(self, key: str) -> bool:
        return bool(key) and key not in self.invalid

    async def resolve(self, key: str) -> CompanySnapshot | None:
        self.resolved.append(key)
        if key in self.failing:
            raise RegistryError(f"registry unavailable for {key}")
        return self.snapshots.get(key)

    async def search(self, name: str) -> list[str]:
        return [
            key
            for key, snap in self.snapshots.items()
            if snap is not None and snap.name and name.lower() in snap.name.lower()
        ]

    async def aclose(self) -> None:
        self.closed = True


class RecordingSink(ReportSink):
    """Report sink that keeps every report it receives."""

    def __init__(self, succeed: bool = True) -> None:
        self.reports: list[Report] = []
        self._succeed = succeed

    @property
    def channel_name(self) -> str:
        return "recording"

    async def send(self, report: Report) -> bool:
        self.reports.append(report)
        return self._succeed


def make_company(uid: str | None = "CHE-100.000.001", **overrides: object) -> CompanySnapshot:
    """Create a CompanySnapshot with realistic defaults."""
    fields: dict[str, object] = {
        "uid": uid,
        "name": "Muster AG",
        "legal_seat": "Zürich",
        "legal_form": "Company limited by shares (AG)",
        "status": "ACTIVE",
        "purpose": "Handel mit Waren aller Art.",
        "canton": "ZH",
        "capital_nominal": "100000",
        "capital_currency": "CHF",
        "address": Address(street="Bahnhofstrasse", house_number="1", city="Zürich", swiss_zip_code="8001"),
        "detail_url": f"https://www.zefix.ch/en/search/entity/list/firm/{uid}",
    }
    fields.update(overrides)
    return CompanySnapshot(**fields)  # type: ignore[arg-type]


@pytest.fixture(autouse=True)
def _default_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep structlog on its defaults so no logger caches a test-scoped stream."""
    monkeypatch.setattr("regwatch.app.setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr("regwatch.cli.main.setup_logging", lambda *args, **kwargs: None)
