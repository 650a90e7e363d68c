"""Report-level data model: the partial and merged dependency reports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from lopper.model.entities import DependencyReport, Location
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
class UsageUncertainty:
    """Counts of confirmed vs. uncertain import uses, with a few sample locations."""

    confirmed_import_uses: int = 0
    uncertain_import_uses: int = 0
    samples: list[Location] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "confirmedImportUses": self.confirmed_import_uses,
                "uncertainImportUses": self.uncertain_import_uses,
                "samples": [sample.to_dict() for sample in self.samples],
            },
            keep=("confirmedImportUses", "uncertainImportUses"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> UsageUncertainty:
        return cls(
            confirmed_import_uses=int_field(raw, "confirmedImportUses"),
            uncertain_import_uses=int_field(raw, "uncertainImportUses"),
            samples=object_list_field(raw, "samples", Location.from_dict),
        )


@dataclass(frozen=True)
class Summary:
    dependency_count: int
    used_exports_count: int
    total_exports_count: int
    used_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "dependencyCount": self.dependency_count,
            "usedExportsCount": self.used_exports_count,
            "totalExportsCount": self.total_exports_count,
            "usedPercent": self.used_percent,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Summary:
        return cls(
            dependency_count=int_field(raw, "dependencyCount"),
            used_exports_count=int_field(raw, "usedExportsCount"),
            total_exports_count=int_field(raw, "totalExportsCount"),
            used_percent=float_field(raw, "usedPercent"),
        )


@dataclass(frozen=True)
class LanguageSummary:
    language: str
    dependency_count: int
    used_exports_count: int
    total_exports_count: int
    used_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "dependencyCount": self.dependency_count,
            "usedExportsCount": self.used_exports_count,
            "totalExportsCount": self.total_exports_count,
            "usedPercent": self.used_percent,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> LanguageSummary:
        return cls(
            language=str_field(raw, "language"),
            dependency_count=int_field(raw, "dependencyCount"),
            used_exports_count=int_field(raw, "usedExportsCount"),
            total_exports_count=int_field(raw, "totalExportsCount"),
            used_percent=float_field(raw, "usedPercent"),
        )


@dataclass(frozen=True)
class CacheInvalidation:
    """Why a cache lookup missed although a pointer existed for the key."""

    key: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "reason": self.reason}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> CacheInvalidation:
        return cls(key=str_field(raw, "key"), reason=str_field(raw, "reason"))


@dataclass
class CacheMetadata:
    """Per-run cache counters surfaced in the final report."""

    enabled: bool = False
    path: str = ""
    read_only: bool = False
    hits: int = 0
    misses: int = 0
    writes: int = 0
    invalidations: list[CacheInvalidation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "enabled": self.enabled,
                "path": self.path,
                "readOnly": self.read_only,
                "hits": self.hits,
                "misses": self.misses,
                "writes": self.writes,
                "invalidations": [item.to_dict() for item in self.invalidations],
            },
            keep=("enabled", "hits", "misses", "writes"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> CacheMetadata:
        return cls(
            enabled=bool_field(raw, "enabled"),
            path=str_field(raw, "path"),
            read_only=bool_field(raw, "readOnly"),
            hits=int_field(raw, "hits"),
            misses=int_field(raw, "misses"),
            writes=int_field(raw, "writes"),
            invalidations=object_list_field(raw, "invalidations", CacheInvalidation.from_dict),
        )


@dataclass
class Report:
    """A dependency report: one adapter's partial output or the merged aggregate."""

    repo_path: str = ""
    schema_version: str = ""
    generated_at: datetime | None = None
    dependencies: list[DependencyReport] = field(default_factory=list)
    usage_uncertainty: UsageUncertainty | None = None
    summary: Summary | None = None
    language_breakdown: list[LanguageSummary] = field(default_factory=list)
    cache: CacheMetadata | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return omit_empty(
            {
                "schemaVersion": self.schema_version,
                "generatedAt": self.generated_at.isoformat() if self.generated_at is not None else None,
                "repoPath": self.repo_path,
                "dependencies": [dep.to_dict() for dep in self.dependencies],
                "usageUncertainty": (
                    self.usage_uncertainty.to_dict() if self.usage_uncertainty is not None else None
                ),
                "summary": self.summary.to_dict() if self.summary is not None else None,
                "languageBreakdown": [item.to_dict() for item in self.language_breakdown],
                "cache": self.cache.to_dict() if self.cache is not None else None,
                "warnings": list(self.warnings),
            },
            keep=("repoPath", "dependencies"),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Report:
        return cls(
            repo_path=str_field(raw, "repoPath"),
            schema_version=str_field(raw, "schemaVersion"),
            generated_at=_parse_timestamp(raw.get("generatedAt")),
            dependencies=object_list_field(raw, "dependencies", DependencyReport.from_dict),
            usage_uncertainty=object_field(raw, "usageUncertainty", UsageUncertainty.from_dict),
            summary=object_field(raw, "summary", Summary.from_dict),
            language_breakdown=object_list_field(raw, "languageBreakdown", LanguageSummary.from_dict),
            cache=object_field(raw, "cache", CacheMetadata.from_dict),
            warnings=str_list_field(raw, "warnings"),
        )


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
