"""Shared pytest fixtures for repository and report test data."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from lopper.model import DependencyReport, ImportUse, Location, Report, SymbolRef

type DependencyFactory = Callable[..., DependencyReport]
type ReportFactory = Callable[..., Report]


@pytest.fixture()
def repo_root(tmp_path: Path) -> Path:
    """Return a small JavaScript repository with a manifest and two sources."""
    root = tmp_path / "repo"
    (root / "src").mkdir(parents=True)
    (root / "package.json").write_text('{"name": "demo", "dependencies": {"lodash": "^4"}}', encoding="utf-8")
    (root / "src" / "index.js").write_text("import { map } from 'lodash';\n", encoding="utf-8")
    (root / "src" / "util.js").write_text("export const noop = () => {};\n", encoding="utf-8")
    return root


@pytest.fixture()
def make_dependency() -> DependencyFactory:
    """Return a builder for dependency reports with sensible defaults."""

    def _make(
        name: str = "lodash",
        *,
        language: str = "js-ts",
        used: int = 1,
        total: int = 2,
        **overrides: Any,
    ) -> DependencyReport:
        dep = DependencyReport(
            name=name,
            language=language,
            used_exports_count=used,
            total_exports_count=total,
            used_percent=(used / total) * 100 if total > 0 else 0.0,
        )
        for field_name, value in overrides.items():
            setattr(dep, field_name, value)
        return dep

    return _make


@pytest.fixture()
def make_report(make_dependency: DependencyFactory) -> ReportFactory:
    """Return a builder for partial reports."""

    def _make(
        *dependencies: DependencyReport,
        repo_path: str = "/repo",
        warnings: list[str] | None = None,
        generated_at: datetime | None = None,
    ) -> Report:
        return Report(
            repo_path=repo_path,
            dependencies=list(dependencies) or [make_dependency()],
            warnings=list(warnings or []),
            generated_at=generated_at,
        )

    return _make


@pytest.fixture()
def lodash_dependency(make_dependency: DependencyFactory) -> DependencyReport:
    """Return a dependency carrying imports and an unused export."""
    return make_dependency(
        "lodash",
        used=1,
        total=2,
        used_imports=[ImportUse(name="map", module="lodash", locations=[Location(file="src/index.js", line=1)])],
        unused_exports=[SymbolRef(name="filter", module="lodash")],
    )


@pytest.fixture()
def fixed_time() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
