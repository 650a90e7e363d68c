"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal

type RuntimeCorrelation = Literal["static-only", "runtime-only", "overlap"]
type InvalidationReason = Literal[
    "pointer-corrupt",
    "input-changed",
    "object-missing",
    "object-read-error",
    "object-corrupt",
]

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
type JsonObject = dict[str, JsonValue]
