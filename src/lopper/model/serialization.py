"""Tolerant field readers shared by the model ``from_dict`` constructors.

Persisted reports may come from an older schema or a damaged cache entry, so
mistyped fields fall back to their defaults instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any


def str_field(raw: Mapping[str, Any], key: str, default: str = "") -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else default


def int_field(raw: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return default
    return int(value)


def float_field(raw: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return default
    return float(value)


def bool_field(raw: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = raw.get(key)
    return value if isinstance(value, bool) else default


def str_list_field(raw: Mapping[str, Any], key: str) -> list[str]:
    value = raw.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def object_list_field[T](raw: Mapping[str, Any], key: str, factory: Callable[[Mapping[str, Any]], T]) -> list[T]:
    value = raw.get(key)
    if not isinstance(value, list):
        return []
    return [factory(item) for item in value if isinstance(item, dict)]


def object_field[T](raw: Mapping[str, Any], key: str, factory: Callable[[Mapping[str, Any]], T]) -> T | None:
    value = raw.get(key)
    if not isinstance(value, dict):
        return None
    return factory(value)


def omit_empty(payload: dict[str, Any], *, keep: tuple[str, ...] = ()) -> dict[str, Any]:
    """Drop falsy optional values so serialized reports stay compact."""
    return {key: value for key, value in payload.items() if key in keep or value}
