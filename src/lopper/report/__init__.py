"""Report scoring and summary helpers for Lopper."""

from __future__ import annotations

from lopper.report.scoring import (
    annotate_finding_confidence,
    annotate_removal_candidate_scores,
    default_removal_candidate_weights,
    filter_findings_by_confidence,
    normalize_removal_candidate_weights,
    removal_candidate_score,
)
from lopper.report.summary import compute_language_breakdown, compute_summary, used_percent

__all__ = [
    "annotate_finding_confidence",
    "annotate_removal_candidate_scores",
    "compute_language_breakdown",
    "compute_summary",
    "default_removal_candidate_weights",
    "filter_findings_by_confidence",
    "normalize_removal_candidate_weights",
    "removal_candidate_score",
    "used_percent",
]
