"""Shared type aliases for Lopper."""

from .cache import CachedReportPayload, CachePointerPayload
from .common import (
    InvalidationReason,
    JsonObject,
    JsonScalar,
    JsonValue,
    RuntimeCorrelation,
)

__all__ = [
    "CachePointerPayload",
    "CachedReportPayload",
    "InvalidationReason",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "RuntimeCorrelation",
]
