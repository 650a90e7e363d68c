"""File-level helpers for hashing."""

from __future__ import annotations

import hashlib
from pathlib import Path

from lopper.constants.cache import FILE_HASH_CHUNK_SIZE, MISSING_FILE_DIGEST


def file_sha256(path: Path) -> str:
    """Return SHA-256 hex digest for a file."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def file_sha256_or_missing(path: Path) -> str:
    """Return the file digest, or the ``missing`` sentinel when the file does not exist.

    Any other read failure is re-raised: a digest that silently skipped an
    unreadable file could not be trusted.
    """
    try:
        return file_sha256(path)
    except FileNotFoundError:
        return MISSING_FILE_DIGEST
