"""End-to-end analysis orchestration across language adapters and roots.

``AnalysisService.analyse`` is the primary entry point: it consults the
result cache for every (adapter, root) pair, runs adapters on misses, merges
the partial reports and applies the confidence and removal-candidate passes.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path

from lopper.analysis.cache import AnalysisCache, CacheEntry
from lopper.analysis.merge import merge_reports
from lopper.analysis.request import AdapterRequest, AnalysisRequest, Candidate
from lopper.config import load_config
from lopper.constants.config import DEFAULT_LOW_CONFIDENCE_WARNING_PERCENT
from lopper.constants.report import LANGUAGE_ALL, NO_RESULTS_WARNING, SCHEMA_VERSION
from lopper.exceptions import AnalysisError, ConfigError
from lopper.model import DependencyReport, ImportUse, Report
from lopper.report.scoring import (
    annotate_finding_confidence,
    annotate_removal_candidate_scores,
    filter_findings_by_confidence,
)
from lopper.report.summary import compute_language_breakdown, compute_summary

logger = logging.getLogger(__name__)


def is_multi_language(language: str) -> bool:
    return language.strip().lower() == LANGUAGE_ALL


def normalize_repo_path(repo_path: str) -> Path:
    """Resolve *repo_path* to an absolute directory or raise ``ConfigError``."""
    if not repo_path.strip():
        raise ConfigError("Repository path must not be empty")
    path = Path(repo_path).expanduser().resolve()
    if not path.is_dir():
        raise ConfigError(f"Repository path does not exist or is not a directory: {path}")
    return path


def normalize_candidate_root(repo_path: Path, root: str) -> str:
    if os.path.isabs(root):
        return os.path.normpath(root)
    return os.path.normpath(os.path.join(repo_path, root))


def apply_language_id(dependencies: list[DependencyReport], language: str) -> None:
    for dep in dependencies:
        if not dep.language:
            dep.language = language


def adjust_relative_locations(repo_path: Path, root: str, dependencies: list[DependencyReport]) -> None:
    """Rebase root-relative import locations so they are relative to *repo_path*."""
    try:
        prefix = os.path.relpath(root, repo_path)
    except ValueError:
        return
    if prefix in ("", "."):
        return
    for dep in dependencies:
        _adjust_import_locations(prefix, dep.used_imports)
        _adjust_import_locations(prefix, dep.unused_imports)


def _adjust_import_locations(prefix: str, imports: list[ImportUse]) -> None:
    for item in imports:
        for location in item.locations:
            if os.path.isabs(location.file):
                continue
            location.file = os.path.normpath(os.path.join(prefix, location.file))


def low_confidence_warning(language: str, candidate: Candidate, threshold: int) -> str | None:
    """Warn when a multi-language run includes a weakly detected adapter."""
    if not is_multi_language(language):
        return None
    if candidate.confidence <= 0 or candidate.confidence >= threshold:
        return None
    return f"low detection confidence for adapter {candidate.adapter.id}: results may be partial"


class AnalysisService:
    """Runs candidate adapters over their roots and assembles one report."""

    def analyse(self, request: AnalysisRequest, candidates: list[Candidate]) -> Report:
        repo_path = normalize_repo_path(request.repo_path)
        config_path = Path(request.config_path) if request.config_path.strip() else None
        config = load_config(repo_path, config_path)
        request = config.apply_to(request)

        cache = AnalysisCache(request.cache, repo_path)
        threshold = _resolve_low_confidence_threshold(request)
        reports: list[Report] = []
        warnings: list[str] = []

        for candidate in candidates:
            warning = low_confidence_warning(request.language, candidate, threshold)
            if warning is not None:
                warnings.append(warning)
                logger.warning(warning)
            candidate_reports, candidate_warnings = self._run_candidate(request, repo_path, candidate, cache)
            reports.extend(candidate_reports)
            warnings.extend(candidate_warnings)

        warnings.extend(cache.take_warnings())

        if not reports:
            logger.warning(NO_RESULTS_WARNING)
            result = Report(repo_path=str(repo_path), warnings=[*warnings, NO_RESULTS_WARNING])
            result.cache = cache.metadata_snapshot()
            result.summary = compute_summary(result.dependencies)
            result.language_breakdown = compute_language_breakdown(result.dependencies)
            result.schema_version = SCHEMA_VERSION
            return result

        result = merge_reports(str(repo_path), reports)
        result.warnings.extend(warnings)
        result.cache = cache.metadata_snapshot()

        annotate_finding_confidence(result.dependencies)
        filter_findings_by_confidence(result.dependencies, float(threshold))
        annotate_removal_candidate_scores(result.dependencies, request.removal_candidate_weights)
        result.summary = compute_summary(result.dependencies)
        result.language_breakdown = compute_language_breakdown(result.dependencies)
        result.schema_version = SCHEMA_VERSION
        logger.info(
            "Analysed %d dependencies from %d partial reports (cache hits=%d misses=%d)",
            len(result.dependencies),
            len(reports),
            result.cache.hits,
            result.cache.misses,
        )
        return result

    def _run_candidate(
        self,
        request: AnalysisRequest,
        repo_path: Path,
        candidate: Candidate,
        cache: AnalysisCache,
    ) -> tuple[list[Report], list[str]]:
        adapter_id = candidate.adapter.id
        roots = candidate.roots or (str(repo_path),)
        reports: list[Report] = []
        warnings: list[str] = []
        seen: set[str] = set()

        for root in roots:
            normalized_root = normalize_candidate_root(repo_path, root)
            if normalized_root in seen:
                continue
            seen.add(normalized_root)

            entry, cached = _load_cached_report(request, cache, adapter_id, normalized_root)
            if cached is not None:
                current = cached
            else:
                try:
                    current = copy.deepcopy(candidate.adapter.analyse(_adapter_request(request, normalized_root)))
                except Exception as exc:
                    error = (
                        exc
                        if isinstance(exc, AnalysisError)
                        else AnalysisError(adapter_id, normalized_root, str(exc))
                    )
                    if not is_multi_language(request.language):
                        raise error from exc
                    warnings.append(str(error))
                    logger.warning("Adapter failed, continuing: %s", error)
                    continue
                _store_cached_report(cache, adapter_id, normalized_root, entry, current)

            apply_language_id(current.dependencies, adapter_id)
            adjust_relative_locations(repo_path, normalized_root, current.dependencies)
            reports.append(current)

        return reports, warnings


def _adapter_request(request: AnalysisRequest, root: str) -> AdapterRequest:
    return AdapterRequest(
        repo_path=root,
        dependency=request.dependency,
        top_n=request.top_n,
        runtime_profile=request.runtime_profile,
        min_usage_percent_for_recommendations=request.min_usage_percent_for_recommendations,
        removal_candidate_weights=request.removal_candidate_weights,
    )


def _load_cached_report(
    request: AnalysisRequest,
    cache: AnalysisCache,
    adapter_id: str,
    root: str,
) -> tuple[CacheEntry, Report | None]:
    try:
        entry = cache.prepare(request, adapter_id, root)
    except (OSError, ValueError) as exc:
        cache.warn(f"analysis cache skipped for {adapter_id}:{root}: {exc}")
        return CacheEntry(), None
    if entry.is_empty:
        return entry, None
    try:
        cached, hit = cache.lookup(entry)
    except OSError as exc:
        cache.warn(f"analysis cache lookup failed for {adapter_id}:{root}: {exc}")
        return entry, None
    return entry, cached if hit else None


def _store_cached_report(cache: AnalysisCache, adapter_id: str, root: str, entry: CacheEntry, report: Report) -> None:
    if entry.is_empty:
        return
    try:
        cache.store(entry, report)
    except OSError as exc:
        cache.warn(f"analysis cache store failed for {adapter_id}:{root}: {exc}")


def _resolve_low_confidence_threshold(request: AnalysisRequest) -> int:
    if request.low_confidence_warning_percent is not None:
        return request.low_confidence_warning_percent
    return DEFAULT_LOW_CONFIDENCE_WARNING_PERCENT
