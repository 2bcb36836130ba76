"""Watch list parsers for CSV text and JSON documents."""

from __future__ import annotations

import csv
import io
from typing import Any

from regwatch.models.watch import WatchEntry

_TRUE_VALUES = ("true", "1", "yes")


class WatchListFormatError(ValueError):
    """Raised when a watch list cannot be interpreted."""


def parse_csv(text: str) -> list[WatchEntry]:
    """Parse delimited text with a header row.

    The header must contain a ``uid`` column; ``label`` and ``active`` are
    optional.  Header names are matched case-insensitively.  Rows with an
    empty uid are ignored.
    """
    rows = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    if not rows:
        raise WatchListFormatError("CSV watch list is empty")

    header = [name.strip().lower() for name in rows[0]]
    if "uid" not in header:
        raise WatchListFormatError("CSV must contain a 'uid' column")
    uid_idx = header.index("uid")
    label_idx = header.index("label") if "label" in header else None
    active_idx = header.index("active") if "active" in header else None

    entries: list[WatchEntry] = []
    for row in rows[1:]:
        uid = _cell(row, uid_idx)
        if not uid:
            continue
        label = _cell(row, label_idx) or None
        active = _parse_active(_cell(row, active_idx)) if active_idx is not None else True
        entries.append(WatchEntry(key=uid, label=label, active=active))
    return entries


def parse_json(data: Any) -> list[WatchEntry]:
    """Parse ``{"companies": [{"uid": ..., "label": ...}]}`` or a bare list."""
    items = data.get("companies") if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise WatchListFormatError("JSON watch list must be a list or an object with a 'companies' list")

    entries: list[WatchEntry] = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise WatchListFormatError(f"Watch list item {position} must be an object")
        uid = str(item.get("uid") or "").strip()
        if not uid:
            raise WatchListFormatError(f"Watch list item {position} has no 'uid'")
        label = item.get("label")
        active = item.get("active", True)
        if isinstance(active, str):
            active = _parse_active(active)
        entries.append(WatchEntry(key=uid, label=str(label) if label else None, active=active is not False))
    return entries


def _cell(row: list[str], idx: int | None) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx].strip()


def _parse_active(raw: str) -> bool:
    raw = raw.strip().lower()
    return raw == "" or raw in _TRUE_VALUES
