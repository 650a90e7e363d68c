"""Constants for report assembly and merging."""

from __future__ import annotations

from lopper.types.common import RuntimeCorrelation

SCHEMA_VERSION: str = "0.1.0"

# Bounded UI hints: merged symbol tables and uncertainty samples are truncated.
TOP_SYMBOLS_LIMIT: int = 5
UNCERTAINTY_SAMPLE_LIMIT: int = 5

RECOMMENDATION_PRIORITY_RANK: dict[str, int] = {"high": 0, "medium": 1, "low": 2}
RECOMMENDATION_UNKNOWN_PRIORITY_RANK: int = 3

RUNTIME_CORRELATION_STATIC_ONLY: RuntimeCorrelation = "static-only"
RUNTIME_CORRELATION_RUNTIME_ONLY: RuntimeCorrelation = "runtime-only"
RUNTIME_CORRELATION_OVERLAP: RuntimeCorrelation = "overlap"

LANGUAGE_ALL: str = "all"

NO_RESULTS_WARNING: str = "no language adapter produced results"
