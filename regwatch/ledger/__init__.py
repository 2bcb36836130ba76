"""Change ledger for regwatch.

Fingerprints normalized snapshots, diffs them, and persists the last known
state of every tracked entity between passes.

Submodules:
    canonical   -- Canonical JSON encoding and SHA-256 fingerprint.
    diff        -- Recursive snapshot diff producing "path: old → new" lines.
    store       -- JSON file state store, read once and written once per pass.
"""

from regwatch.ledger.canonical import encode, fingerprint
from regwatch.ledger.diff import diff_snapshots
from regwatch.ledger.store import JsonStateStore, StateFileError

__all__ = [
    "JsonStateStore",
    "StateFileError",
    "diff_snapshots",
    "encode",
    "fingerprint",
]
