"""Config data model for Lopper analysis thresholds."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from lopper.constants.config import (
    DEFAULT_LOW_CONFIDENCE_WARNING_PERCENT,
    DEFAULT_MIN_USAGE_PERCENT_FOR_RECOMMENDATIONS,
)
from lopper.constants.scoring import (
    DEFAULT_WEIGHT_CONFIDENCE,
    DEFAULT_WEIGHT_IMPACT,
    DEFAULT_WEIGHT_USAGE,
)
from lopper.model import RemovalCandidateWeights

if TYPE_CHECKING:
    from lopper.analysis.request import AnalysisRequest


@dataclass(frozen=True)
class LopperConfig:
    """Resolved thresholds from ``.lopper.yml`` layered over the defaults."""

    low_confidence_warning_percent: int = DEFAULT_LOW_CONFIDENCE_WARNING_PERCENT
    min_usage_percent_for_recommendations: int = DEFAULT_MIN_USAGE_PERCENT_FOR_RECOMMENDATIONS
    removal_candidate_weight_usage: float = DEFAULT_WEIGHT_USAGE
    removal_candidate_weight_impact: float = DEFAULT_WEIGHT_IMPACT
    removal_candidate_weight_confidence: float = DEFAULT_WEIGHT_CONFIDENCE
    config_path: str = ""

    @property
    def removal_candidate_weights(self) -> RemovalCandidateWeights:
        return RemovalCandidateWeights(
            usage=self.removal_candidate_weight_usage,
            impact=self.removal_candidate_weight_impact,
            confidence=self.removal_candidate_weight_confidence,
        )

    def apply_to(self, request: AnalysisRequest) -> AnalysisRequest:
        """Fill request thresholds the caller left unset from this config.

        Explicit request values always win over the config file. The config
        path is the exception: the resolved file that was actually loaded
        replaces a relative request path so later hashing does not depend on
        the working directory.
        """
        return replace(
            request,
            config_path=self.config_path or request.config_path,
            low_confidence_warning_percent=(
                request.low_confidence_warning_percent
                if request.low_confidence_warning_percent is not None
                else self.low_confidence_warning_percent
            ),
            min_usage_percent_for_recommendations=(
                request.min_usage_percent_for_recommendations
                if request.min_usage_percent_for_recommendations is not None
                else self.min_usage_percent_for_recommendations
            ),
            removal_candidate_weights=(
                request.removal_candidate_weights
                if request.removal_candidate_weights is not None
                else self.removal_candidate_weights
            ),
        )
