"""Watch list entries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WatchEntry:
    """One tracked identifier from the watch list.

    ``active=False`` removes the entry from a pass without touching its
    stored state.
    """

    key: str
    label: str | None = None
    active: bool = True
