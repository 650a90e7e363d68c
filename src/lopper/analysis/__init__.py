"""Analysis orchestration, result caching and report merging for Lopper."""

from __future__ import annotations

from lopper.analysis.cache import AnalysisCache, CacheEntry, compute_input_digest
from lopper.analysis.merge import merge_dependency, merge_reports
from lopper.analysis.request import AdapterRequest, AnalysisRequest, CacheOptions, Candidate, LanguageAdapter
from lopper.analysis.service import AnalysisService

__all__ = [
    "AdapterRequest",
    "AnalysisCache",
    "AnalysisRequest",
    "AnalysisService",
    "CacheEntry",
    "CacheOptions",
    "Candidate",
    "LanguageAdapter",
    "compute_input_digest",
    "merge_dependency",
    "merge_reports",
]
