"""Enumeration of the files whose content affects analysis results."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from lopper.constants.cache import CACHE_DIRNAME
from lopper.constants.discovery import (
    BASELINE_SKIP_DIRECTORIES,
    CACHE_RELEVANT_EXTENSIONS,
    CACHE_RELEVANT_FILENAMES,
    COMMON_ADDITIONAL_SKIP_DIRECTORIES,
)
from lopper.io import file_sha256

RECORD_SEPARATOR: str = "\x00"


def should_skip_dir(name: str) -> bool:
    """Return True for VCS, build output, dependency and cache directories."""
    normalized = name.strip().lower()
    if normalized == CACHE_DIRNAME:
        return True
    return normalized in BASELINE_SKIP_DIRECTORIES or normalized in COMMON_ADDITIONAL_SKIP_DIRECTORIES


def is_cache_relevant_file(name: str) -> bool:
    """Return True for source files and manifests/lockfiles of supported languages."""
    base = name.lower()
    if base in CACHE_RELEVANT_FILENAMES:
        return True
    return os.path.splitext(base)[1] in CACHE_RELEVANT_EXTENSIONS


def iter_relevant_files(root: Path) -> Iterator[Path]:
    """Yield relevant regular files under *root*, pruning skipped directories.

    Enumeration order follows the filesystem; callers needing a stable order
    must sort. Symlinks are never followed, and a directory that cannot be
    listed raises rather than silently shrinking the input set.
    """

    def _raise(exc: OSError) -> None:
        raise exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = [name for name in dirnames if not should_skip_dir(name)]
        current = Path(dirpath)
        for filename in filenames:
            path = current / filename
            if not is_cache_relevant_file(filename):
                continue
            if path.is_symlink() or not path.is_file():
                continue
            yield path


def collect_file_records(root: Path) -> list[str]:
    """Return sorted ``relative/path\\0sha256`` records for every relevant file."""
    records = [
        f"{path.relative_to(root).as_posix()}{RECORD_SEPARATOR}{file_sha256(path)}"
        for path in iter_relevant_files(root)
    ]
    return sorted(records)
