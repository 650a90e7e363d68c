"""Stable SHA-256 fingerprints for bytes and canonicalized values."""

from __future__ import annotations

import hashlib
import json


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of *data*."""
    return hashlib.sha256(data).hexdigest()


def canonical_json_bytes(value: object) -> bytes:
    """Encode *value* as compact JSON with sorted keys."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def hash_json(value: object) -> str:
    """Return a stable hash of the canonical JSON encoding of *value*."""
    return sha256_hex(canonical_json_bytes(value))
