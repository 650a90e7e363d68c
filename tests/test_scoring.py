"""Tests for finding confidence and removal-candidate scoring."""

from __future__ import annotations

import math
from collections.abc import Callable

import pytest

from lopper.model import (
    DependencyReport,
    ImportUse,
    Recommendation,
    RemovalCandidateWeights,
    RiskCue,
    RuntimeUsage,
    SymbolRef,
)
from lopper.report.scoring import (
    annotate_finding_confidence,
    annotate_removal_candidate_scores,
    default_removal_candidate_weights,
    filter_findings_by_confidence,
    normalize_removal_candidate_weights,
    removal_candidate_score,
    round_to,
)

type DependencyFactory = Callable[..., DependencyReport]

DEFAULT_WEIGHTS = RemovalCandidateWeights(usage=0.5, impact=0.3, confidence=0.2)


def _with_findings(make_dependency: DependencyFactory, **overrides: object) -> DependencyReport:
    return make_dependency(
        "lodash",
        unused_exports=[SymbolRef(name="zip", module="lodash")],
        unused_imports=[ImportUse(name="chunk", module="lodash")],
        recommendations=[Recommendation(code="remove-unused", priority="medium", message="m")],
        **overrides,
    )


class TestFindingConfidence:
    def test_clean_dependency_scores_full_confidence(self, make_dependency: DependencyFactory) -> None:
        dep = _with_findings(make_dependency)

        annotate_finding_confidence([dep])

        for finding in (*dep.unused_exports, *dep.unused_imports, *dep.recommendations):
            assert finding.confidence_score == 100.0
            assert finding.confidence_reason_codes == []

    def test_penalties_accumulate_with_ordered_reason_codes(self, make_dependency: DependencyFactory) -> None:
        dep = _with_findings(
            make_dependency,
            total=0,
            used=0,
            runtime_usage=RuntimeUsage(load_count=2, correlation="runtime-only", runtime_only=True),
            used_imports=[ImportUse(name="*", module="lodash")],
            risk_cues=[
                RiskCue(code="dynamic", severity="low", message="m"),
                RiskCue(code="native", severity="High", message="m"),
                RiskCue(code="other", severity="unknown", message="m"),
            ],
        )

        annotate_finding_confidence([dep])

        # 100 - (35 + 20 + 15 + 6 + 20)
        assert dep.unused_exports[0].confidence_score == 4.0
        assert dep.unused_exports[0].confidence_reason_codes == [
            "missing-export-inventory",
            "runtime-only-usage",
            "wildcard-import",
            "risk-high",
            "risk-low",
        ]
        assert all(cue.confidence_score == 4.0 for cue in dep.risk_cues)

    def test_score_clamps_at_zero(self, make_dependency: DependencyFactory) -> None:
        dep = _with_findings(
            make_dependency,
            total=0,
            used=0,
            risk_cues=[RiskCue(code=f"c{index}", severity="high", message="m") for index in range(5)],
        )

        annotate_finding_confidence([dep])

        assert dep.unused_exports[0].confidence_score == 0.0
        assert dep.unused_exports[0].confidence_reason_codes == ["missing-export-inventory", "risk-high"]

    def test_annotation_is_idempotent(self, make_dependency: DependencyFactory) -> None:
        dep = _with_findings(make_dependency, risk_cues=[RiskCue(code="c", severity="medium", message="m")])

        annotate_finding_confidence([dep])
        first = [(item.confidence_score, list(item.confidence_reason_codes)) for item in dep.risk_cues]
        annotate_finding_confidence([dep])

        assert [(item.confidence_score, item.confidence_reason_codes) for item in dep.risk_cues] == first
        assert first == [(88.0, ["risk-medium"])]


class TestFilterFindings:
    def test_drops_findings_below_threshold(self, make_dependency: DependencyFactory) -> None:
        weak = _with_findings(make_dependency, total=0, used=0)
        strong = _with_findings(make_dependency)
        annotate_finding_confidence([weak, strong])

        filter_findings_by_confidence([weak, strong], 70.0)

        assert (weak.unused_exports, weak.unused_imports, weak.recommendations) == ([], [], [])
        assert len(strong.unused_exports) == 1
        assert len(strong.recommendations) == 1

    def test_threshold_is_inclusive(self, make_dependency: DependencyFactory) -> None:
        dep = _with_findings(make_dependency, total=0, used=0)
        annotate_finding_confidence([dep])

        filter_findings_by_confidence([dep], 65.0)

        assert len(dep.unused_exports) == 1

    @pytest.mark.parametrize("threshold", [0.0, -5.0])
    def test_non_positive_threshold_keeps_everything(
        self,
        make_dependency: DependencyFactory,
        threshold: float,
    ) -> None:
        dep = _with_findings(make_dependency)

        filter_findings_by_confidence([dep], threshold)

        assert len(dep.unused_exports) == 1
        assert len(dep.unused_imports) == 1


class TestWeights:
    def test_default_weights(self) -> None:
        assert default_removal_candidate_weights() == DEFAULT_WEIGHTS
        assert normalize_removal_candidate_weights(None) == DEFAULT_WEIGHTS

    def test_weights_are_scaled_to_one(self) -> None:
        normalized = normalize_removal_candidate_weights(RemovalCandidateWeights(usage=2, impact=1, confidence=1))

        assert normalized == RemovalCandidateWeights(usage=0.5, impact=0.25, confidence=0.25)

    @pytest.mark.parametrize(
        "weights",
        [
            RemovalCandidateWeights(usage=0, impact=0, confidence=0),
            RemovalCandidateWeights(usage=-1, impact=1, confidence=1),
            RemovalCandidateWeights(usage=math.nan, impact=1, confidence=1),
            RemovalCandidateWeights(usage=math.inf, impact=1, confidence=1),
            RemovalCandidateWeights(usage=1e308, impact=1e308, confidence=0),
        ],
    )
    def test_invalid_weights_fall_back_to_defaults(self, weights: RemovalCandidateWeights) -> None:
        assert normalize_removal_candidate_weights(weights) == DEFAULT_WEIGHTS


class TestRemovalCandidate:
    def test_signals_and_weighted_score(self, make_dependency: DependencyFactory) -> None:
        mostly_unused = make_dependency("lodash", used=1, total=10)
        half_used = make_dependency("react", used=5, total=10)
        deps = [mostly_unused, half_used]

        annotate_removal_candidate_scores(deps)

        first = mostly_unused.removal_candidate
        assert first is not None
        assert (first.usage, first.impact, first.confidence) == (90.0, 100.0, 100.0)
        assert first.score == 95.0
        assert first.weights == DEFAULT_WEIGHTS
        assert first.rationale == []

        second = half_used.removal_candidate
        assert second is not None
        assert (second.usage, second.impact) == (50.0, 55.6)
        # 50 * 0.5 + 55.56 * 0.3 + 100 * 0.2
        assert second.score == 61.7
        assert removal_candidate_score(half_used) == 61.7

    def test_lower_used_percent_never_scores_lower_usage(self, make_dependency: DependencyFactory) -> None:
        deps = [make_dependency(f"dep{used}", used=used, total=20) for used in range(21)]

        annotate_removal_candidate_scores(deps)

        usage_scores = [dep.removal_candidate.usage for dep in deps if dep.removal_candidate is not None]
        assert usage_scores == sorted(usage_scores, reverse=True)

    def test_unknown_totals_add_rationale(self, make_dependency: DependencyFactory) -> None:
        dep = make_dependency(
            "mystery",
            used=0,
            total=0,
            runtime_usage=RuntimeUsage(load_count=1, correlation="runtime-only", runtime_only=True),
            used_imports=[ImportUse(name="*", module="mystery")],
        )

        annotate_removal_candidate_scores([dep])

        candidate = dep.removal_candidate
        assert candidate is not None
        assert (candidate.usage, candidate.impact, candidate.confidence) == (0.0, 0.0, 30.0)
        assert candidate.rationale == [
            "runtime-only usage indicates lower static confidence",
            "wildcard import usage reduces per-symbol confidence",
            "usage coverage unknown because total exports are unavailable",
        ]
        assert candidate.score == 6.0

    def test_usage_is_recomputed_when_percent_missing(self, make_dependency: DependencyFactory) -> None:
        dep = make_dependency("lodash", used=1, total=4, used_percent=0.0)

        annotate_removal_candidate_scores([dep])

        assert dep.removal_candidate is not None
        assert dep.removal_candidate.usage == 75.0

    def test_custom_weights_are_normalized(self, make_dependency: DependencyFactory) -> None:
        dep = make_dependency("lodash", used=1, total=10)

        annotate_removal_candidate_scores([dep], RemovalCandidateWeights(usage=1, impact=0, confidence=0))

        assert dep.removal_candidate is not None
        assert dep.removal_candidate.weights == RemovalCandidateWeights(usage=1.0, impact=0.0, confidence=0.0)
        assert dep.removal_candidate.score == 90.0

    def test_stale_candidates_are_replaced(self, make_dependency: DependencyFactory) -> None:
        dep = make_dependency("lodash", used=1, total=10)
        annotate_removal_candidate_scores([dep])
        dep.used_exports_count = 10
        dep.used_percent = 100.0

        annotate_removal_candidate_scores([dep])

        assert dep.removal_candidate is not None
        assert dep.removal_candidate.usage == 0.0

    def test_missing_candidate_has_no_score(self, make_dependency: DependencyFactory) -> None:
        assert removal_candidate_score(make_dependency()) is None

    def test_empty_list_is_a_no_op(self) -> None:
        annotate_removal_candidate_scores([])


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.05, 0.1), (0.25, 0.3), (2.45, 2.5), (61.66666, 61.7), (-0.25, -0.3), (100.0, 100.0)],
)
def test_round_to_rounds_half_away_from_zero(value: float, expected: float) -> None:
    assert round_to(value) == expected
