"""JSON file backed state store.

The whole mapping is read once at pass start and written once at pass end.
Writes go to a temporary sibling file that replaces the target, so readers
never see a half-written state file.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

import structlog

from regwatch.models.state import StateRecord

_log = structlog.get_logger(component="ledger.store")


class StateFileError(RuntimeError):
    """Raised when the persisted state cannot be read."""


class JsonStateStore:
    """Durable mapping from entity key to StateRecord.

    Args:
        path: Location of the JSON state file.  A missing file is an empty
              state, not an error.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, StateRecord]:
        """Return every persisted record, or an empty mapping on first run."""
        if not self._path.exists():
            _log.info("state_file_absent", path=str(self._path))
            return {}

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StateFileError(f"Cannot read state file {self._path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise StateFileError(f"State file {self._path} must contain a JSON object")

        state: dict[str, StateRecord] = {}
        for key, data in raw.items():
            if not isinstance(data, dict):
                raise StateFileError(f"State entry {key!r} must be a JSON object")
            try:
                state[key] = StateRecord.from_dict(data)
            except ValueError as exc:
                raise StateFileError(f"State entry {key!r} is invalid: {exc}") from exc

        _log.debug("state_loaded", path=str(self._path), entities=len(state))
        return state

    def save(self, state: Mapping[str, StateRecord]) -> None:
        """Overwrite the state file with *state*."""
        payload = {key: record.to_dict() for key, record in state.items()}
        text = json.dumps(payload, indent=2, ensure_ascii=False)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        _log.info("state_saved", path=str(self._path), entities=len(payload))
