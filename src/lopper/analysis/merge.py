"""Merging of per-root partial reports into one canonical report.

Dependencies are grouped by ``(language, name)``; the first occurrence is the
base and later duplicates are folded into it. Output order is always the
sorted key order, so the order of partial reports never shows in the result.
Inputs are deep-copied: partial reports may still be referenced elsewhere.
"""

from __future__ import annotations

import copy
from datetime import UTC, datetime
from collections.abc import Callable, Hashable, Iterable
from typing import Any

from lopper.constants.report import (
    RECOMMENDATION_PRIORITY_RANK,
    RECOMMENDATION_UNKNOWN_PRIORITY_RANK,
    RUNTIME_CORRELATION_OVERLAP,
    RUNTIME_CORRELATION_RUNTIME_ONLY,
    RUNTIME_CORRELATION_STATIC_ONLY,
    TOP_SYMBOLS_LIMIT,
    UNCERTAINTY_SAMPLE_LIMIT,
)
from lopper.model import (
    CodemodReport,
    CodemodSkip,
    CodemodSuggestion,
    DependencyReport,
    ImportUse,
    Location,
    Recommendation,
    Report,
    RiskCue,
    RuntimeModuleUsage,
    RuntimeSymbolUsage,
    RuntimeUsage,
    SymbolRef,
    SymbolUsage,
    UsageUncertainty,
)
from lopper.report.summary import compute_language_breakdown, compute_summary, used_percent
from lopper.types import RuntimeCorrelation


def merge_reports(repo_path: str, reports: Iterable[Report]) -> Report:
    """Combine partial reports into a single report rooted at *repo_path*."""
    result = Report(repo_path=repo_path)
    merged_by_key: dict[tuple[str, str], DependencyReport] = {}

    for current in reports:
        result.warnings.extend(current.warnings)
        result.usage_uncertainty = merge_usage_uncertainty(result.usage_uncertainty, current.usage_uncertainty)
        if current.generated_at is not None and (
            result.generated_at is None or _as_aware(current.generated_at) > _as_aware(result.generated_at)
        ):
            result.generated_at = current.generated_at
        for dep in current.dependencies:
            existing = merged_by_key.get(dep.key)
            if existing is None:
                merged_by_key[dep.key] = copy.deepcopy(dep)
            else:
                merged_by_key[dep.key] = merge_dependency(existing, dep)

    result.dependencies = [merged_by_key[key] for key in sorted(merged_by_key)]
    result.summary = compute_summary(result.dependencies)
    result.language_breakdown = compute_language_breakdown(result.dependencies)
    return result


def merge_dependency(left: DependencyReport, right: DependencyReport) -> DependencyReport:
    """Fold *right* into a copy of *left*.

    Counts are summed and ``used_percent`` is recomputed from the sums. An
    import that any side reports as used is dropped from the unused list.
    """
    merged = copy.deepcopy(left)
    merged.used_exports_count += right.used_exports_count
    merged.total_exports_count += right.total_exports_count
    if merged.total_exports_count > 0:
        merged.used_percent = used_percent(merged.used_exports_count, merged.total_exports_count)
    merged.estimated_unused_bytes += right.estimated_unused_bytes

    merged.used_imports = merge_import_uses(left.used_imports, right.used_imports)
    merged.unused_imports = filter_used_overlaps(
        merge_import_uses(left.unused_imports, right.unused_imports),
        merged.used_imports,
    )
    merged.unused_exports = merge_unique_sorted(
        left.unused_exports, right.unused_exports, key=_symbol_ref_key, sort_key=_symbol_ref_key
    )
    merged.risk_cues = merge_unique_sorted(
        left.risk_cues, right.risk_cues, key=_risk_cue_key, sort_key=_risk_cue_key
    )
    merged.recommendations = merge_unique_sorted(
        left.recommendations,
        right.recommendations,
        key=lambda item: item.code,
        sort_key=_recommendation_sort_key,
    )
    merged.codemod = merge_codemod_report(left.codemod, right.codemod)
    merged.top_used_symbols = merge_top_symbols(left.top_used_symbols, right.top_used_symbols)
    merged.runtime_usage = merge_runtime_usage(left.runtime_usage, right.runtime_usage)
    return merged


def merge_unique_sorted[T](
    left: Iterable[T],
    right: Iterable[T],
    *,
    key: Callable[[T], Hashable],
    sort_key: Callable[[T], Any],
) -> list[T]:
    """Deduplicate by *key* (later items replace earlier ones) and sort by *sort_key*."""
    merged: dict[Hashable, T] = {}
    for item in [*left, *right]:
        merged[key(item)] = copy.deepcopy(item)
    return sorted(merged.values(), key=sort_key)


def merge_import_uses(left: list[ImportUse], right: list[ImportUse]) -> list[ImportUse]:
    """Merge import uses by ``(module, name)``, concatenating their locations."""
    merged: dict[tuple[str, str], ImportUse] = {}
    for item in [*left, *right]:
        current = merged.get(item.key)
        if current is None:
            merged[item.key] = copy.deepcopy(item)
            continue
        current.locations.extend(copy.deepcopy(item.locations))
    return sorted(merged.values(), key=lambda item: item.key)


def filter_used_overlaps(unused: list[ImportUse], used: list[ImportUse]) -> list[ImportUse]:
    """Drop unused imports that another root confirmed as used."""
    if not unused or not used:
        return unused
    used_keys = {item.key for item in used}
    return [item for item in unused if item.key not in used_keys]


def merge_codemod_report(left: CodemodReport | None, right: CodemodReport | None) -> CodemodReport | None:
    if left is None and right is None:
        return None
    if left is None or right is None:
        return copy.deepcopy(left if left is not None else right)

    mode = left.mode if left.mode.strip() else right.mode
    return CodemodReport(
        mode=mode,
        suggestions=merge_unique_sorted(
            left.suggestions,
            right.suggestions,
            key=_codemod_suggestion_key,
            sort_key=_codemod_suggestion_key,
        ),
        skips=merge_unique_sorted(
            left.skips,
            right.skips,
            key=_codemod_skip_key,
            sort_key=_codemod_skip_sort_key,
        ),
    )


def merge_top_symbols(left: list[SymbolUsage], right: list[SymbolUsage]) -> list[SymbolUsage]:
    merged = _sum_counts([*left, *right], key=lambda item: (item.module, item.name))
    ordered = sorted(merged, key=lambda item: (-item.count, item.name, item.module))
    return ordered[:TOP_SYMBOLS_LIMIT]


def merge_runtime_usage(left: RuntimeUsage | None, right: RuntimeUsage | None) -> RuntimeUsage | None:
    """Merge runtime usage, deriving the correlation from both sides' signals."""
    if left is None and right is None:
        return None

    load_count = 0
    has_static = False
    has_runtime = False
    modules: list[RuntimeModuleUsage] = []
    symbols: list[RuntimeSymbolUsage] = []
    for side in (left, right):
        if side is None:
            continue
        load_count += side.load_count
        side_static, side_runtime = runtime_usage_signals(side)
        has_static = has_static or side_static
        has_runtime = has_runtime or side_runtime
        modules.extend(side.modules)
        symbols.extend(side.top_symbols)

    correlation = merge_runtime_correlation(has_static, has_runtime)
    merged_modules = sorted(
        _sum_counts(modules, key=lambda item: item.module),
        key=lambda item: (-item.count, item.module),
    )
    merged_symbols = sorted(
        _sum_counts(symbols, key=lambda item: (item.module, item.symbol)),
        key=lambda item: (-item.count, item.module, item.symbol),
    )
    return RuntimeUsage(
        load_count=load_count,
        correlation=correlation,
        runtime_only=correlation == RUNTIME_CORRELATION_RUNTIME_ONLY,
        modules=merged_modules,
        top_symbols=merged_symbols[:TOP_SYMBOLS_LIMIT],
    )


def runtime_usage_signals(usage: RuntimeUsage | None) -> tuple[bool, bool]:
    """Return ``(has_static, has_runtime)`` for one side of a runtime merge.

    Reports without a correlation fall back to the legacy ``runtime_only``
    flag, counting runtime evidence only when modules were actually loaded.
    """
    if usage is None:
        return False, False
    if usage.correlation == RUNTIME_CORRELATION_OVERLAP:
        return True, True
    if usage.correlation == RUNTIME_CORRELATION_RUNTIME_ONLY:
        return False, True
    if usage.correlation == RUNTIME_CORRELATION_STATIC_ONLY:
        return True, False
    if usage.runtime_only:
        return False, usage.load_count > 0
    return True, usage.load_count > 0


def merge_runtime_correlation(has_static: bool, has_runtime: bool) -> RuntimeCorrelation:
    if has_static and has_runtime:
        return RUNTIME_CORRELATION_OVERLAP
    if has_runtime:
        return RUNTIME_CORRELATION_RUNTIME_ONLY
    return RUNTIME_CORRELATION_STATIC_ONLY


def merge_usage_uncertainty(
    left: UsageUncertainty | None,
    right: UsageUncertainty | None,
) -> UsageUncertainty | None:
    """Sum counters and keep at most five samples, left side first."""
    if left is None or right is None:
        present = left if left is not None else right
        if present is None:
            return None
        clone = copy.deepcopy(present)
        clone.samples = clone.samples[:UNCERTAINTY_SAMPLE_LIMIT]
        return clone

    samples: list[Location] = copy.deepcopy([*left.samples, *right.samples][:UNCERTAINTY_SAMPLE_LIMIT])
    return UsageUncertainty(
        confirmed_import_uses=left.confirmed_import_uses + right.confirmed_import_uses,
        uncertain_import_uses=left.uncertain_import_uses + right.uncertain_import_uses,
        samples=samples,
    )


def _as_aware(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so mixed partial reports stay comparable."""
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def recommendation_priority_rank(priority: str) -> int:
    return RECOMMENDATION_PRIORITY_RANK.get(priority.strip().lower(), RECOMMENDATION_UNKNOWN_PRIORITY_RANK)


def _sum_counts[C: (SymbolUsage, RuntimeModuleUsage, RuntimeSymbolUsage)](
    items: list[C],
    *,
    key: Callable[[C], Hashable],
) -> list[C]:
    merged: dict[Hashable, C] = {}
    for item in items:
        current = merged.get(key(item))
        if current is None:
            merged[key(item)] = copy.deepcopy(item)
            continue
        current.count += item.count
    return list(merged.values())


def _symbol_ref_key(item: SymbolRef) -> tuple[str, str]:
    return (item.module, item.name)


def _risk_cue_key(item: RiskCue) -> tuple[str, str]:
    return (item.code, item.severity)


def _recommendation_sort_key(item: Recommendation) -> tuple[int, str]:
    return (recommendation_priority_rank(item.priority), item.code)


def _codemod_suggestion_key(item: CodemodSuggestion) -> tuple[str, int, str, str]:
    return (item.file, item.line, item.import_name, item.to_module)


def _codemod_skip_key(item: CodemodSkip) -> tuple[str, int, str, str]:
    return (item.file, item.line, item.import_name, item.reason_code)


def _codemod_skip_sort_key(item: CodemodSkip) -> tuple[str, int, str, str]:
    return (item.file, item.line, item.reason_code, item.import_name)
