"""Constants for the cache-relevant file walk."""

from __future__ import annotations

BASELINE_SKIP_DIRECTORIES: frozenset[str] = frozenset(
    {
        ".git",
        ".idea",
        "node_modules",
        "dist",
        "build",
        "vendor",
    }
)

COMMON_ADDITIONAL_SKIP_DIRECTORIES: frozenset[str] = frozenset(
    {
        ".cache",
        ".hg",
        ".next",
        ".svn",
        "out",
        "target",
    }
)

CACHE_RELEVANT_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".mjs",
        ".cjs",
        ".py",
        ".go",
        ".rs",
        ".php",
        ".java",
        ".kt",
        ".kts",
        ".cs",
        ".fs",
        ".fsx",
        ".c",
        ".cc",
        ".cpp",
        ".cxx",
        ".h",
        ".hpp",
    }
)

# Manifests, lockfiles and lopper config files, compared by lowercase basename.
CACHE_RELEVANT_FILENAMES: frozenset[str] = frozenset(
    {
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "package.json",
        "tsconfig.json",
        "composer.lock",
        "composer.json",
        "cargo.lock",
        "cargo.toml",
        "go.mod",
        "go.sum",
        "requirements.txt",
        "requirements-dev.txt",
        "pipfile",
        "pipfile.lock",
        "poetry.lock",
        "pyproject.toml",
        "pom.xml",
        "build.gradle",
        "build.gradle.kts",
        "gradle.lockfile",
        "settings.gradle",
        "settings.gradle.kts",
        "packages.lock.json",
        ".lopper.yml",
        ".lopper.yaml",
        "lopper.json",
    }
)
