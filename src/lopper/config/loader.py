"""Config loading and validation for Lopper thresholds."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import yaml

from lopper.config.model import LopperConfig
from lopper.constants.config import (
    ALLOWED_CONFIG_KEYS,
    ALLOWED_THRESHOLD_KEYS,
    CONFIG_FILENAMES,
    PERCENT_KEYS,
    THRESHOLDS_KEY,
    WEIGHT_KEYS,
)
from lopper.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> LopperConfig:
    """Load and validate thresholds from ``.lopper.yml`` (or an explicit path).

    Values under a nested ``thresholds:`` block take precedence over the same
    keys at the top level.
    """
    root = root.resolve()
    path = resolve_config_path(root, config_path)
    if path is None:
        return LopperConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid config file at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a mapping")

    _reject_unknown_keys(raw, ALLOWED_CONFIG_KEYS, "")

    thresholds_raw = raw.get(THRESHOLDS_KEY, {})
    if thresholds_raw is None:
        thresholds_raw = {}
    if not isinstance(thresholds_raw, dict):
        raise ConfigError("thresholds must be a mapping")
    _reject_unknown_keys(thresholds_raw, ALLOWED_THRESHOLD_KEYS, f"{THRESHOLDS_KEY}.")

    values: dict[str, Any] = {}
    for key in (*PERCENT_KEYS, *WEIGHT_KEYS):
        value = thresholds_raw.get(key, raw.get(key))
        if value is None:
            continue
        if key in PERCENT_KEYS:
            values[key] = _ensure_percent(value, key)
        else:
            values[key] = _ensure_weight(value, key)

    config = LopperConfig(config_path=str(path), **values)
    weights = config.removal_candidate_weights
    if weights.usage <= 0 and weights.impact <= 0 and weights.confidence <= 0:
        raise ConfigError("invalid removal candidate weights: at least one weight must be greater than 0")
    return config


def resolve_config_path(root: Path, config_path: Path | None) -> Path | None:
    """Return the config file to load, or ``None`` when no config is present."""
    if config_path is not None:
        path = config_path if config_path.is_absolute() else root / config_path
        path = path.resolve()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return path

    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _reject_unknown_keys(raw: dict[Any, Any], allowed: frozenset[str], prefix: str) -> None:
    unknown = sorted(str(key) for key in raw if key not in allowed)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(prefix + key for key in unknown)}")


def _ensure_percent(value: Any, key_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key_name} must be an integer")
    if value < 0 or value > 100:
        raise ConfigError(f"invalid threshold {key_name}: {value} (must be between 0 and 100)")
    return value


def _ensure_weight(value: Any, key_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigError(f"{key_name} must be a number")
    if not math.isfinite(value) or value < 0:
        raise ConfigError(f"invalid threshold {key_name}: {value} (must be >= 0)")
    return float(value)
