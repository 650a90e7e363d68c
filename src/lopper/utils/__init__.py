"""Shared utility helpers."""

from __future__ import annotations

from .digest import canonical_json_bytes, hash_json, sha256_hex

__all__ = ["canonical_json_bytes", "hash_json", "sha256_hex"]
