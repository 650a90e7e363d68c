"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAMES: tuple[str, ...] = (".lopper.yml", ".lopper.yaml", "lopper.json")

DEFAULT_LOW_CONFIDENCE_WARNING_PERCENT: int = 40
DEFAULT_MIN_USAGE_PERCENT_FOR_RECOMMENDATIONS: int = 40

THRESHOLDS_KEY: str = "thresholds"

PERCENT_KEYS: tuple[str, ...] = (
    "low_confidence_warning_percent",
    "min_usage_percent_for_recommendations",
)
WEIGHT_KEYS: tuple[str, ...] = (
    "removal_candidate_weight_usage",
    "removal_candidate_weight_impact",
    "removal_candidate_weight_confidence",
)

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({THRESHOLDS_KEY, *PERCENT_KEYS, *WEIGHT_KEYS})
ALLOWED_THRESHOLD_KEYS: frozenset[str] = frozenset({*PERCENT_KEYS, *WEIGHT_KEYS})
