"""Recursive snapshot diff producing human-readable change lines.

Each line has the form ``path: old → new`` where ``path`` is the dotted
field path.  Nested objects are walked key by key in sorted order; arrays
are compared as a whole and reported on one line.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

_ARROW = "→"


def diff_snapshots(old: Mapping[str, Any] | None, new: Mapping[str, Any] | None) -> list[str]:
    """Return the ordered list of differences between two snapshots.

    Missing keys compare as null.  A side that is missing or null where the
    other side is an object is treated as an empty object.
    """
    diffs: list[str] = []
    _diff_into(diffs, old or {}, new or {}, prefix="")
    return diffs


def _diff_into(diffs: list[str], old: Mapping[str, Any], new: Mapping[str, Any], prefix: str) -> None:
    for key in sorted(set(old) | set(new)):
        o = old.get(key)
        n = new.get(key)
        path = f"{prefix}.{key}" if prefix else key

        o_is_obj = isinstance(o, Mapping)
        n_is_obj = isinstance(n, Mapping)
        if o_is_obj or n_is_obj:
            if (o_is_obj or o is None) and (n_is_obj or n is None):
                _diff_into(diffs, o or {}, n or {}, path)
            else:
                # object replaced by a scalar or array, or the reverse
                diffs.append(f"{path}: {_render(o)} {_ARROW} {_render(n)}")
            continue

        if isinstance(o, (list, tuple)) or isinstance(n, (list, tuple)):
            o_text = _compact(o if o is not None else [])
            n_text = _compact(n if n is not None else [])
            if o_text != n_text:
                diffs.append(f"{path}: {o_text} {_ARROW} {n_text}")
            continue

        if type(o) is not type(n) or o != n:
            diffs.append(f"{path}: {_render(o)} {_ARROW} {_render(n)}")


def _compact(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def _render(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return _compact(value)
    return str(value)
