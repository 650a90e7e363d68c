"""Typed cache payload structures persisted to disk."""

from __future__ import annotations

from typing import TypedDict

from lopper.types.common import JsonObject


class CachePointerPayload(TypedDict):
    """Pointer file stored under ``keys/<keyDigest>.json``."""

    inputDigest: str
    objectDigest: str


class CachedReportPayload(TypedDict):
    """Object file stored under ``objects/<objectDigest>.json``."""

    report: JsonObject
