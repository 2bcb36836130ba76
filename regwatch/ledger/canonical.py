"""Canonical encoding and fingerprinting of snapshots.

The encoding is compact JSON with object keys sorted ascending, so the
fingerprint does not depend on the order an upstream API or serializer
emitted the fields in.  Arrays keep their order.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any


def _reject(value: Any) -> Any:
    raise TypeError(f"cannot canonically encode value of type {type(value).__name__}")


def _check_keys(value: Any) -> None:
    # json.dumps silently stringifies int/float/bool/None keys; refuse them
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"object keys must be str, got {type(key).__name__}")
            _check_keys(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_keys(item)


def encode(value: Any) -> str:
    """Return the canonical text form of a JSON-like *value*.

    Raises:
        TypeError: for values outside the JSON data model.
        ValueError: for NaN or infinite floats.
    """
    _check_keys(value)
    if isinstance(value, Mapping) and not isinstance(value, dict):
        value = dict(value)
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_reject,
    )


def fingerprint(snapshot: Any) -> str:
    """Return the SHA-256 hex digest of *snapshot*'s canonical encoding.

    Accepts a mapping or any object with a ``to_dict()`` method.
    """
    if hasattr(snapshot, "to_dict"):
        snapshot = snapshot.to_dict()
    return hashlib.sha256(encode(snapshot).encode("utf-8")).hexdigest()
