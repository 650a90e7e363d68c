"""Dependency-level data model shared by adapters, the cache and the merge engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from lopper.model.serialization import (
    bool_field,
    float_field,
    int_field,
    object_field,
    object_list_field,
    omit_empty,
    str_field,
    str_list_field,
)


@dataclass
class Location:
    """Source position of an import or uncertain usage."""

    file: str
    line: int = 0
    column: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "line": self.line, "column": self.column}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Location:
        return cls(
            file=str_field(raw, "file"),
            line=int_field(raw, "line"),
            column=int_field(raw, "column"),
        )


@dataclass
class ImportUse:
    """An imported symbol of a dependency with the places it was imported."""

    name: str
    module: str
    locations: list[Location] = field(default_factory=list)
    provenance: list[str] = field(default_factory=list)
    confidence_score: float = 0.0
    confidence_reason_codes: list[str] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str]:
        return (self.module, self.name)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "name": self.name,
                "module": self.module,
                "locations": [location.to_dict() for location in self.locations],
                "provenance": list(self.provenance),
                "confidenceScore": self.confidence_score,
                "confidenceReasonCodes": list(self.confidence_reason_codes),
            },
            keep=("name", "module"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ImportUse:
        return cls(
            name=str_field(raw, "name"),
            module=str_field(raw, "module"),
            locations=object_list_field(raw, "locations", Location.from_dict),
            provenance=str_list_field(raw, "provenance"),
            confidence_score=float_field(raw, "confidenceScore"),
            confidence_reason_codes=str_list_field(raw, "confidenceReasonCodes"),
        )


@dataclass
class SymbolRef:
    """An exported symbol of a dependency that no import references."""

    name: str
    module: str
    confidence_score: float = 0.0
    confidence_reason_codes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "name": self.name,
                "module": self.module,
                "confidenceScore": self.confidence_score,
                "confidenceReasonCodes": list(self.confidence_reason_codes),
            },
            keep=("name", "module"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> SymbolRef:
        return cls(
            name=str_field(raw, "name"),
            module=str_field(raw, "module"),
            confidence_score=float_field(raw, "confidenceScore"),
            confidence_reason_codes=str_list_field(raw, "confidenceReasonCodes"),
        )


@dataclass
class SymbolUsage:
    name: str
    module: str = ""
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return omit_empty({"name": self.name, "module": self.module, "count": self.count}, keep=("name", "count"))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> SymbolUsage:
        return cls(name=str_field(raw, "name"), module=str_field(raw, "module"), count=int_field(raw, "count"))


@dataclass
class RiskCue:
    code: str
    severity: str
    message: str = ""
    confidence_score: float = 0.0
    confidence_reason_codes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "code": self.code,
                "severity": self.severity,
                "message": self.message,
                "confidenceScore": self.confidence_score,
                "confidenceReasonCodes": list(self.confidence_reason_codes),
            },
            keep=("code", "severity", "message"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RiskCue:
        return cls(
            code=str_field(raw, "code"),
            severity=str_field(raw, "severity"),
            message=str_field(raw, "message"),
            confidence_score=float_field(raw, "confidenceScore"),
            confidence_reason_codes=str_list_field(raw, "confidenceReasonCodes"),
        )


@dataclass
class Recommendation:
    code: str
    priority: str
    message: str = ""
    rationale: str = ""
    confidence_score: float = 0.0
    confidence_reason_codes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "code": self.code,
                "priority": self.priority,
                "message": self.message,
                "rationale": self.rationale,
                "confidenceScore": self.confidence_score,
                "confidenceReasonCodes": list(self.confidence_reason_codes),
            },
            keep=("code", "priority", "message"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Recommendation:
        return cls(
            code=str_field(raw, "code"),
            priority=str_field(raw, "priority"),
            message=str_field(raw, "message"),
            rationale=str_field(raw, "rationale"),
            confidence_score=float_field(raw, "confidenceScore"),
            confidence_reason_codes=str_list_field(raw, "confidenceReasonCodes"),
        )


@dataclass
class CodemodSuggestion:
    file: str
    line: int
    import_name: str
    from_module: str = ""
    to_module: str = ""
    original: str = ""
    replacement: str = ""
    patch: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "importName": self.import_name,
            "fromModule": self.from_module,
            "toModule": self.to_module,
            "original": self.original,
            "replacement": self.replacement,
            "patch": self.patch,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> CodemodSuggestion:
        return cls(
            file=str_field(raw, "file"),
            line=int_field(raw, "line"),
            import_name=str_field(raw, "importName"),
            from_module=str_field(raw, "fromModule"),
            to_module=str_field(raw, "toModule"),
            original=str_field(raw, "original"),
            replacement=str_field(raw, "replacement"),
            patch=str_field(raw, "patch"),
        )


@dataclass
class CodemodSkip:
    file: str
    line: int
    import_name: str
    module: str = ""
    reason_code: str = ""
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "importName": self.import_name,
            "module": self.module,
            "reasonCode": self.reason_code,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> CodemodSkip:
        return cls(
            file=str_field(raw, "file"),
            line=int_field(raw, "line"),
            import_name=str_field(raw, "importName"),
            module=str_field(raw, "module"),
            reason_code=str_field(raw, "reasonCode"),
            message=str_field(raw, "message"),
        )


@dataclass
class CodemodReport:
    """Import-rewrite suggestions and the imports that could not be rewritten."""

    mode: str = ""
    suggestions: list[CodemodSuggestion] = field(default_factory=list)
    skips: list[CodemodSkip] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "mode": self.mode,
                "suggestions": [item.to_dict() for item in self.suggestions],
                "skips": [item.to_dict() for item in self.skips],
            },
            keep=("mode",),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> CodemodReport:
        return cls(
            mode=str_field(raw, "mode"),
            suggestions=object_list_field(raw, "suggestions", CodemodSuggestion.from_dict),
            skips=object_list_field(raw, "skips", CodemodSkip.from_dict),
        )


@dataclass
class RuntimeModuleUsage:
    module: str
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"module": self.module, "count": self.count}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RuntimeModuleUsage:
        return cls(module=str_field(raw, "module"), count=int_field(raw, "count"))


@dataclass
class RuntimeSymbolUsage:
    symbol: str
    module: str = ""
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return omit_empty({"symbol": self.symbol, "module": self.module, "count": self.count}, keep=("symbol", "count"))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RuntimeSymbolUsage:
        return cls(symbol=str_field(raw, "symbol"), module=str_field(raw, "module"), count=int_field(raw, "count"))


@dataclass
class RuntimeUsage:
    """Runtime trace correlation for a dependency.

    ``runtime_only`` is the legacy flag that predates ``correlation``; it is
    still read as a fallback signal when ``correlation`` is blank.
    """

    load_count: int = 0
    correlation: str = ""
    runtime_only: bool = False
    modules: list[RuntimeModuleUsage] = field(default_factory=list)
    top_symbols: list[RuntimeSymbolUsage] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "loadCount": self.load_count,
                "correlation": self.correlation,
                "runtimeOnly": self.runtime_only,
                "modules": [item.to_dict() for item in self.modules],
                "topSymbols": [item.to_dict() for item in self.top_symbols],
            },
            keep=("loadCount",),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RuntimeUsage:
        return cls(
            load_count=int_field(raw, "loadCount"),
            correlation=str_field(raw, "correlation"),
            runtime_only=bool_field(raw, "runtimeOnly"),
            modules=object_list_field(raw, "modules", RuntimeModuleUsage.from_dict),
            top_symbols=object_list_field(raw, "topSymbols", RuntimeSymbolUsage.from_dict),
        )


@dataclass(frozen=True)
class RemovalCandidateWeights:
    """Relative weights of the usage, impact and confidence signals."""

    usage: float
    impact: float
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {"usage": self.usage, "impact": self.impact, "confidence": self.confidence}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RemovalCandidateWeights:
        return cls(
            usage=float_field(raw, "usage"),
            impact=float_field(raw, "impact"),
            confidence=float_field(raw, "confidence"),
        )


@dataclass
class RemovalCandidate:
    score: float
    usage: float
    impact: float
    confidence: float
    weights: RemovalCandidateWeights
    rationale: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "score": self.score,
                "usage": self.usage,
                "impact": self.impact,
                "confidence": self.confidence,
                "weights": self.weights.to_dict(),
                "rationale": list(self.rationale),
            },
            keep=("score", "usage", "impact", "confidence", "weights"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RemovalCandidate:
        weights = object_field(raw, "weights", RemovalCandidateWeights.from_dict)
        return cls(
            score=float_field(raw, "score"),
            usage=float_field(raw, "usage"),
            impact=float_field(raw, "impact"),
            confidence=float_field(raw, "confidence"),
            weights=weights if weights is not None else RemovalCandidateWeights(0.0, 0.0, 0.0),
            rationale=str_list_field(raw, "rationale"),
        )


@dataclass
class DependencyReport:
    """Usage analysis for one dependency of one language."""

    name: str
    language: str = ""
    used_exports_count: int = 0
    total_exports_count: int = 0
    used_percent: float = 0.0
    estimated_unused_bytes: int = 0
    top_used_symbols: list[SymbolUsage] = field(default_factory=list)
    used_imports: list[ImportUse] = field(default_factory=list)
    unused_imports: list[ImportUse] = field(default_factory=list)
    unused_exports: list[SymbolRef] = field(default_factory=list)
    risk_cues: list[RiskCue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    codemod: CodemodReport | None = None
    runtime_usage: RuntimeUsage | None = None
    removal_candidate: RemovalCandidate | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.language, self.name)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "language": self.language,
                "name": self.name,
                "usedExportsCount": self.used_exports_count,
                "totalExportsCount": self.total_exports_count,
                "usedPercent": self.used_percent,
                "estimatedUnusedBytes": self.estimated_unused_bytes,
                "topUsedSymbols": [item.to_dict() for item in self.top_used_symbols],
                "usedImports": [item.to_dict() for item in self.used_imports],
                "unusedImports": [item.to_dict() for item in self.unused_imports],
                "unusedExports": [item.to_dict() for item in self.unused_exports],
                "riskCues": [item.to_dict() for item in self.risk_cues],
                "recommendations": [item.to_dict() for item in self.recommendations],
                "codemod": self.codemod.to_dict() if self.codemod is not None else None,
                "runtimeUsage": self.runtime_usage.to_dict() if self.runtime_usage is not None else None,
                "removalCandidate": (
                    self.removal_candidate.to_dict() if self.removal_candidate is not None else None
                ),
            },
            keep=("name", "usedExportsCount", "totalExportsCount", "usedPercent", "estimatedUnusedBytes"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> DependencyReport:
        return cls(
            name=str_field(raw, "name"),
            language=str_field(raw, "language"),
            used_exports_count=int_field(raw, "usedExportsCount"),
            total_exports_count=int_field(raw, "totalExportsCount"),
            used_percent=float_field(raw, "usedPercent"),
            estimated_unused_bytes=int_field(raw, "estimatedUnusedBytes"),
            top_used_symbols=object_list_field(raw, "topUsedSymbols", SymbolUsage.from_dict),
            used_imports=object_list_field(raw, "usedImports", ImportUse.from_dict),
            unused_imports=object_list_field(raw, "unusedImports", ImportUse.from_dict),
            unused_exports=object_list_field(raw, "unusedExports", SymbolRef.from_dict),
            risk_cues=object_list_field(raw, "riskCues", RiskCue.from_dict),
            recommendations=object_list_field(raw, "recommendations", Recommendation.from_dict),
            codemod=object_field(raw, "codemod", CodemodReport.from_dict),
            runtime_usage=object_field(raw, "runtimeUsage", RuntimeUsage.from_dict),
            removal_candidate=object_field(raw, "removalCandidate", RemovalCandidate.from_dict),
        )
