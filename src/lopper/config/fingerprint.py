"""Request fingerprinting for cache keys."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from lopper.constants.cache import CACHE_SCHEMA_VERSION
from lopper.utils import hash_json

if TYPE_CHECKING:
    from lopper.analysis.request import AnalysisRequest


def request_fingerprint(request: AnalysisRequest, adapter_id: str, root: str) -> str:
    """Return a stable hash of every request field that changes analysis output.

    Two runs share a fingerprint only when the same adapter analyses the same
    root under the same parameters; what the root contains is tracked
    separately by the input digest.
    """
    payload: dict[str, object] = {
        "schema": CACHE_SCHEMA_VERSION,
        "adapter": adapter_id.strip(),
        "root": os.path.normpath(root),
        "dependency": request.dependency,
        "topN": request.top_n,
        "runtimeProfile": request.runtime_profile,
        "configPath": request.config_path.strip(),
    }
    if request.min_usage_percent_for_recommendations is not None:
        payload["minUsagePercent"] = request.min_usage_percent_for_recommendations
    if request.removal_candidate_weights is not None:
        payload["weights"] = request.removal_candidate_weights.to_dict()
    if request.low_confidence_warning_percent is not None:
        payload["lowConfidenceWarningPercent"] = request.low_confidence_warning_percent
    return hash_json(payload)
