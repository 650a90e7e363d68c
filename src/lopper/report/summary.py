"""Report-wide summaries derived from the dependency list."""

from __future__ import annotations

from lopper.model import DependencyReport, LanguageSummary, Summary


def used_percent(used: int, total: int) -> float:
    """Return the used share in percent, or 0 when the total is unknown."""
    if total <= 0:
        return 0.0
    return (used / total) * 100


def compute_summary(dependencies: list[DependencyReport]) -> Summary | None:
    """Aggregate export counts across all dependencies."""
    if not dependencies:
        return None
    used = sum(dep.used_exports_count for dep in dependencies)
    total = sum(dep.total_exports_count for dep in dependencies)
    return Summary(
        dependency_count=len(dependencies),
        used_exports_count=used,
        total_exports_count=total,
        used_percent=used_percent(used, total),
    )


def compute_language_breakdown(dependencies: list[DependencyReport]) -> list[LanguageSummary]:
    """Aggregate export counts per language, sorted by language id.

    Dependencies without a language are left out.
    """
    totals: dict[str, list[int]] = {}
    for dep in dependencies:
        if not dep.language:
            continue
        counts = totals.setdefault(dep.language, [0, 0, 0])
        counts[0] += 1
        counts[1] += dep.used_exports_count
        counts[2] += dep.total_exports_count

    return [
        LanguageSummary(
            language=language,
            dependency_count=count,
            used_exports_count=used,
            total_exports_count=total,
            used_percent=used_percent(used, total),
        )
        for language, (count, used, total) in sorted(totals.items())
    ]
