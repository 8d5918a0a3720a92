"""Canonical JSON encoding used for reproducible digests.

Grids, population snapshots and resolved settings are hashed to compare runs
(determinism checks, run-log events).  Keys are sorted, whitespace dropped,
tuples flattened to arrays and non-finite floats rejected so that identical
inputs always produce identical bytes.
"""

from __future__ import annotations

import hashlib
import json
import math
from typing import Any

__all__ = ["canonical_dump", "canonical_sha256"]


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError("NaN and Infinity are not permitted in canonical payloads")
        return obj
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj.keys(), key=str)}
    raise TypeError(f"Unsupported type for canonicalisation: {type(obj)!r}")


def canonical_dump(obj: Any) -> bytes:
    """Return the canonical UTF-8 bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def canonical_sha256(obj: Any) -> str:
    """Return ``sha256-<hex>`` of the canonical representation of ``obj``."""

    digest = hashlib.sha256(canonical_dump(obj)).hexdigest()
    return f"sha256-{digest}"
