"""Analysis request types and the language adapter contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from lopper.model import RemovalCandidateWeights, Report


@dataclass(frozen=True)
class CacheOptions:
    """User-facing cache settings; ``path`` defaults to ``<repo>/.lopper-cache``."""

    enabled: bool = True
    path: str = ""
    read_only: bool = False


@dataclass(frozen=True)
class AnalysisRequest:
    """Parameters of one analysis run across every candidate adapter and root."""

    repo_path: str
    dependency: str = ""
    top_n: int = 0
    language: str = ""
    config_path: str = ""
    runtime_profile: str = ""
    low_confidence_warning_percent: int | None = None
    min_usage_percent_for_recommendations: int | None = None
    removal_candidate_weights: RemovalCandidateWeights | None = None
    cache: CacheOptions | None = None


@dataclass(frozen=True)
class AdapterRequest:
    """Flattened parameters handed to a language adapter for a single root."""

    repo_path: str
    dependency: str = ""
    top_n: int = 0
    runtime_profile: str = ""
    min_usage_percent_for_recommendations: int | None = None
    removal_candidate_weights: RemovalCandidateWeights | None = None


class LanguageAdapter(Protocol):
    """A per-language analyzer producing one partial report per root."""

    id: str

    def analyse(self, request: AdapterRequest) -> Report: ...


@dataclass(frozen=True)
class Candidate:
    """An adapter selected for the repository together with its detected roots."""

    adapter: LanguageAdapter
    roots: tuple[str, ...] = field(default_factory=tuple)
    confidence: int = 0
