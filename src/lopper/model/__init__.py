"""Core data models for Lopper."""

from .entities import (
    CodemodReport,
    CodemodSkip,
    CodemodSuggestion,
    DependencyReport,
    ImportUse,
    Location,
    Recommendation,
    RemovalCandidate,
    RemovalCandidateWeights,
    RiskCue,
    RuntimeModuleUsage,
    RuntimeSymbolUsage,
    RuntimeUsage,
    SymbolRef,
    SymbolUsage,
)
from .report import CacheInvalidation, CacheMetadata, LanguageSummary, Report, Summary, UsageUncertainty

__all__ = [
    "CacheInvalidation",
    "CacheMetadata",
    "CodemodReport",
    "CodemodSkip",
    "CodemodSuggestion",
    "DependencyReport",
    "ImportUse",
    "LanguageSummary",
    "Location",
    "Recommendation",
    "RemovalCandidate",
    "RemovalCandidateWeights",
    "Report",
    "RiskCue",
    "RuntimeModuleUsage",
    "RuntimeSymbolUsage",
    "RuntimeUsage",
    "Summary",
    "SymbolRef",
    "SymbolUsage",
    "UsageUncertainty",
]
