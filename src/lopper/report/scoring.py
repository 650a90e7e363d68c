"""Finding confidence and removal-candidate scoring for merged dependencies.

Both passes recompute from the current dependency data and overwrite any
previously derived fields, so running them twice gives the same result.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from lopper.constants.scoring import (
    DEFAULT_WEIGHT_CONFIDENCE,
    DEFAULT_WEIGHT_IMPACT,
    DEFAULT_WEIGHT_USAGE,
    ORDERED_REASON_CODES,
    PENALTY_MISSING_EXPORT_INVENTORY,
    PENALTY_RUNTIME_ONLY_USAGE,
    PENALTY_WILDCARD_IMPORT,
    RATIONALE_RUNTIME_ONLY,
    RATIONALE_USAGE_UNKNOWN,
    RATIONALE_WILDCARD_IMPORT,
    REASON_MISSING_EXPORT_INVENTORY,
    REASON_RUNTIME_ONLY_USAGE,
    REASON_WILDCARD_IMPORT,
    RISK_SEVERITY_PENALTIES,
    SCORE_DECIMAL_PLACES,
    SCORE_MAX,
    SCORE_MIN,
    WILDCARD_IMPORT_NAME,
)
from lopper.model import DependencyReport, ImportUse, RemovalCandidate, RemovalCandidateWeights

DEFAULT_REMOVAL_CANDIDATE_WEIGHTS = RemovalCandidateWeights(
    usage=DEFAULT_WEIGHT_USAGE,
    impact=DEFAULT_WEIGHT_IMPACT,
    confidence=DEFAULT_WEIGHT_CONFIDENCE,
)


@dataclass(frozen=True)
class ConfidenceAssessment:
    """Accumulated penalty for one dependency and the signals that fired."""

    penalty: float = 0.0
    reason_codes: tuple[str, ...] = ()
    rationale: tuple[str, ...] = ()

    @property
    def score(self) -> float:
        return clamp(SCORE_MAX - self.penalty)

    @property
    def ordered_reason_codes(self) -> list[str]:
        """Distinct reason codes in fixed priority order."""
        return [code for code in ORDERED_REASON_CODES if code in self.reason_codes]


def default_removal_candidate_weights() -> RemovalCandidateWeights:
    return DEFAULT_REMOVAL_CANDIDATE_WEIGHTS


def normalize_removal_candidate_weights(weights: RemovalCandidateWeights | None) -> RemovalCandidateWeights:
    """Scale weights to sum to 1, falling back to the defaults when unusable.

    Negative, NaN or infinite weights, or a total that is not positive, yield
    the defaults unchanged.
    """
    if weights is None:
        return DEFAULT_REMOVAL_CANDIDATE_WEIGHTS
    values = (weights.usage, weights.impact, weights.confidence)
    if not all(math.isfinite(value) for value in values):
        return DEFAULT_REMOVAL_CANDIDATE_WEIGHTS
    if any(value < 0 for value in values):
        return DEFAULT_REMOVAL_CANDIDATE_WEIGHTS
    total = sum(values)
    if not math.isfinite(total) or total <= 0:
        return DEFAULT_REMOVAL_CANDIDATE_WEIGHTS
    return RemovalCandidateWeights(
        usage=weights.usage / total,
        impact=weights.impact / total,
        confidence=weights.confidence / total,
    )


def assess_confidence(dep: DependencyReport) -> ConfidenceAssessment:
    """Accumulate confidence penalties for *dep*.

    Penalties are additive and unbounded; risk cues contribute once each.
    """
    penalty = 0.0
    reason_codes: list[str] = []
    rationale: list[str] = []

    if dep.total_exports_count <= 0:
        penalty += PENALTY_MISSING_EXPORT_INVENTORY
        reason_codes.append(REASON_MISSING_EXPORT_INVENTORY)
    if dep.runtime_usage is not None and dep.runtime_usage.runtime_only:
        penalty += PENALTY_RUNTIME_ONLY_USAGE
        reason_codes.append(REASON_RUNTIME_ONLY_USAGE)
        rationale.append(RATIONALE_RUNTIME_ONLY)
    if has_wildcard_import(dep.used_imports):
        penalty += PENALTY_WILDCARD_IMPORT
        reason_codes.append(REASON_WILDCARD_IMPORT)
        rationale.append(RATIONALE_WILDCARD_IMPORT)
    for cue in dep.risk_cues:
        severity_penalty = RISK_SEVERITY_PENALTIES.get(cue.severity.lower())
        if severity_penalty is None:
            continue
        amount, code = severity_penalty
        penalty += amount
        reason_codes.append(code)

    return ConfidenceAssessment(penalty=penalty, reason_codes=tuple(reason_codes), rationale=tuple(rationale))


def annotate_finding_confidence(dependencies: Iterable[DependencyReport]) -> None:
    """Attach the dependency's confidence score and reason codes to each of its findings."""
    for dep in dependencies:
        assessment = assess_confidence(dep)
        score = round_to(assessment.score)
        reason_codes = assessment.ordered_reason_codes
        for finding in (*dep.unused_exports, *dep.unused_imports, *dep.recommendations, *dep.risk_cues):
            finding.confidence_score = score
            finding.confidence_reason_codes = list(reason_codes)


def filter_findings_by_confidence(dependencies: Iterable[DependencyReport], min_confidence: float) -> None:
    """Drop findings scored below *min_confidence*; a threshold of 0 keeps everything."""
    if min_confidence <= 0:
        return
    for dep in dependencies:
        dep.unused_exports = [item for item in dep.unused_exports if item.confidence_score >= min_confidence]
        dep.unused_imports = [item for item in dep.unused_imports if item.confidence_score >= min_confidence]
        dep.recommendations = [item for item in dep.recommendations if item.confidence_score >= min_confidence]
        dep.risk_cues = [item for item in dep.risk_cues if item.confidence_score >= min_confidence]


def annotate_removal_candidate_scores(
    dependencies: list[DependencyReport],
    weights: RemovalCandidateWeights | None = None,
) -> None:
    """Compute a removal candidate for every dependency, replacing stale ones.

    Impact is relative: the dependency with the most unused exports in this
    list scores 100.
    """
    if not dependencies:
        return
    resolved_weights = normalize_removal_candidate_weights(weights)
    max_impact_raw = max(raw_impact(dep) for dep in dependencies)
    for dep in dependencies:
        dep.removal_candidate = build_removal_candidate(dep, max_impact_raw, resolved_weights)


def removal_candidate_score(dep: DependencyReport) -> float | None:
    if dep.removal_candidate is None:
        return None
    return dep.removal_candidate.score


def build_removal_candidate(
    dep: DependencyReport,
    max_impact_raw: float,
    weights: RemovalCandidateWeights,
) -> RemovalCandidate:
    usage, usage_known = usage_signal(dep)
    impact = impact_signal(dep, max_impact_raw)
    assessment = assess_confidence(dep)
    confidence = assessment.score

    rationale = list(assessment.rationale)
    if not usage_known:
        rationale.append(RATIONALE_USAGE_UNKNOWN)

    score = usage * weights.usage + impact * weights.impact + confidence * weights.confidence
    return RemovalCandidate(
        score=round_to(score),
        usage=round_to(usage),
        impact=round_to(impact),
        confidence=round_to(confidence),
        weights=weights,
        rationale=rationale,
    )


def usage_signal(dep: DependencyReport) -> tuple[float, bool]:
    """Return ``(100 - used percent, True)``, or ``(0, False)`` when totals are unknown."""
    if dep.total_exports_count <= 0:
        return 0.0, False
    percent = dep.used_percent
    if percent <= 0:
        percent = (dep.used_exports_count / dep.total_exports_count) * 100
    return clamp(SCORE_MAX - percent), True


def raw_impact(dep: DependencyReport) -> float:
    if dep.total_exports_count <= 0:
        return 0.0
    return float(max(dep.total_exports_count - dep.used_exports_count, 0))


def impact_signal(dep: DependencyReport, max_impact_raw: float) -> float:
    if max_impact_raw <= 0:
        return 0.0
    return clamp((raw_impact(dep) / max_impact_raw) * SCORE_MAX)


def has_wildcard_import(imports: Iterable[ImportUse]) -> bool:
    return any(item.name == WILDCARD_IMPORT_NAME for item in imports)


def clamp(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    return max(low, min(high, value))


def round_to(value: float, places: int = SCORE_DECIMAL_PLACES) -> float:
    """Round half away from zero, matching how scores are displayed."""
    scale = 10**places
    return math.floor(abs(value) * scale + 0.5) / scale * (1 if value >= 0 else -1)
