"""Constants for finding confidence and removal-candidate scoring."""

from __future__ import annotations

DEFAULT_WEIGHT_USAGE: float = 0.50
DEFAULT_WEIGHT_IMPACT: float = 0.30
DEFAULT_WEIGHT_CONFIDENCE: float = 0.20

SCORE_MIN: float = 0.0
SCORE_MAX: float = 100.0
SCORE_DECIMAL_PLACES: int = 1

PENALTY_MISSING_EXPORT_INVENTORY: float = 35.0
PENALTY_RUNTIME_ONLY_USAGE: float = 20.0
PENALTY_WILDCARD_IMPORT: float = 15.0

REASON_MISSING_EXPORT_INVENTORY: str = "missing-export-inventory"
REASON_RUNTIME_ONLY_USAGE: str = "runtime-only-usage"
REASON_WILDCARD_IMPORT: str = "wildcard-import"
REASON_RISK_HIGH: str = "risk-high"
REASON_RISK_MEDIUM: str = "risk-medium"
REASON_RISK_LOW: str = "risk-low"

RISK_SEVERITY_PENALTIES: dict[str, tuple[float, str]] = {
    "high": (20.0, REASON_RISK_HIGH),
    "medium": (12.0, REASON_RISK_MEDIUM),
    "low": (6.0, REASON_RISK_LOW),
}

# Reason codes attached to findings always follow this priority order.
ORDERED_REASON_CODES: tuple[str, ...] = (
    REASON_MISSING_EXPORT_INVENTORY,
    REASON_RUNTIME_ONLY_USAGE,
    REASON_WILDCARD_IMPORT,
    REASON_RISK_HIGH,
    REASON_RISK_MEDIUM,
    REASON_RISK_LOW,
)

WILDCARD_IMPORT_NAME: str = "*"

RATIONALE_RUNTIME_ONLY: str = "runtime-only usage indicates lower static confidence"
RATIONALE_WILDCARD_IMPORT: str = "wildcard import usage reduces per-symbol confidence"
RATIONALE_USAGE_UNKNOWN: str = "usage coverage unknown because total exports are unavailable"
