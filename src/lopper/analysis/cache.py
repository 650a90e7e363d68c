"""Content-addressable cache of per-root analysis reports.

Layout under the cache root::

    keys/<keyDigest>.json       {"inputDigest": ..., "objectDigest": ...}
    objects/<objectDigest>.json {"report": ...}

The key digest captures *how* a root was analysed (adapter, root and the
request fields that change output); the input digest captures *what* was
analysed (relevant file paths and contents). A pointer is served only when
its stored input digest matches the current one. Objects are named by the
digest of their own bytes, so identical reports share storage and are never
rewritten.

No cache fault is fatal: construction failures disable the cache and queue a
warning, and unreadable or corrupt entries are reported as misses.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path

from lopper.analysis.request import AnalysisRequest, CacheOptions
from lopper.analysis.walker import RECORD_SEPARATOR, collect_file_records
from lopper.config import request_fingerprint
from lopper.constants.cache import (
    CACHE_DIR_MODE,
    CACHE_DIRNAME,
    CACHE_ENTRY_SUFFIX,
    CACHE_FILE_MODE,
    CACHE_KEYS_DIRNAME,
    CACHE_OBJECTS_DIRNAME,
    CACHE_TEMP_INFIX,
    INVALIDATION_INPUT_CHANGED,
    INVALIDATION_OBJECT_CORRUPT,
    INVALIDATION_OBJECT_MISSING,
    INVALIDATION_OBJECT_READ_ERROR,
    INVALIDATION_POINTER_CORRUPT,
)
from lopper.io import file_sha256_or_missing, load_json_file, write_bytes_atomic
from lopper.model import CacheInvalidation, CacheMetadata, Report
from lopper.types import CachedReportPayload, CachePointerPayload, InvalidationReason
from lopper.utils import canonical_json_bytes, sha256_hex

logger = logging.getLogger(__name__)

_DIGEST_PATTERN = re.compile(r"^[0-9a-f]{64}$")


@dataclass(frozen=True)
class CacheEntry:
    """Opaque descriptor of one cacheable analysis; empty when caching is off."""

    key_label: str = ""
    key_digest: str = ""
    input_digest: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.key_digest


@dataclass(frozen=True)
class ResolvedCacheOptions:
    enabled: bool
    path: Path
    read_only: bool


def resolve_cache_options(options: CacheOptions | None, repo_path: Path) -> ResolvedCacheOptions:
    """Apply defaults: enabled, ``<repo>/.lopper-cache``, writable."""
    default_path = repo_path / CACHE_DIRNAME
    if options is None:
        return ResolvedCacheOptions(enabled=True, path=default_path, read_only=False)
    custom_path = options.path.strip()
    return ResolvedCacheOptions(
        enabled=options.enabled,
        path=Path(custom_path) if custom_path else default_path,
        read_only=options.read_only,
    )


class AnalysisCache:
    """Per-run handle on the on-disk result cache.

    Counters and the warning queue live on the instance; construct a fresh
    cache for every analysis run.
    """

    def __init__(self, options: CacheOptions | None, repo_path: Path) -> None:
        self._options = resolve_cache_options(options, repo_path)
        self._metadata = CacheMetadata(
            enabled=self._options.enabled,
            path=str(self._options.path),
            read_only=self._options.read_only,
        )
        self._warnings: list[str] = []
        self._usable = False
        if not self._options.enabled:
            return
        try:
            self._keys_dir.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
            self._objects_dir.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            self.warn(f"analysis cache unavailable: {exc}")
            return
        self._usable = True

    @property
    def _keys_dir(self) -> Path:
        return self._options.path / CACHE_KEYS_DIRNAME

    @property
    def _objects_dir(self) -> Path:
        return self._options.path / CACHE_OBJECTS_DIRNAME

    @property
    def active(self) -> bool:
        """True when lookups and stores actually touch the filesystem."""
        return self._options.enabled and self._usable

    def warn(self, message: str) -> None:
        """Queue a warning for the report; blank messages are ignored."""
        if not message.strip():
            return
        self._warnings.append(message)
        logger.warning(message)

    def take_warnings(self) -> list[str]:
        """Drain and return the queued warnings."""
        drained = list(self._warnings)
        self._warnings.clear()
        return drained

    def metadata_snapshot(self) -> CacheMetadata:
        """Return a copy of the counters that later cache activity cannot alter."""
        return replace(self._metadata, invalidations=list(self._metadata.invalidations))

    def prepare(self, request: AnalysisRequest, adapter_id: str, root: str) -> CacheEntry:
        """Build the cache entry for analysing *root* with *adapter_id*.

        Raises ``OSError`` when a relevant file exists but cannot be read.
        """
        if not self.active:
            return CacheEntry()
        adapter_id = adapter_id.strip()
        normalized_root = os.path.normpath(root)
        return CacheEntry(
            key_label=f"{adapter_id}:{normalized_root}",
            key_digest=request_fingerprint(request, adapter_id, normalized_root),
            input_digest=compute_input_digest(Path(normalized_root), request.config_path),
        )

    def lookup(self, entry: CacheEntry) -> tuple[Report | None, bool]:
        """Return ``(report, True)`` on a hit and ``(None, False)`` otherwise.

        Raises ``OSError`` only when an existing pointer cannot be read.
        """
        if not self.active or entry.is_empty:
            return None, False

        pointer_path = self._keys_dir / f"{entry.key_digest}{CACHE_ENTRY_SUFFIX}"
        try:
            raw_pointer = load_json_file(pointer_path)
        except FileNotFoundError:
            return self._miss(entry, None)
        except ValueError:
            return self._miss(entry, INVALIDATION_POINTER_CORRUPT)

        pointer = _parse_pointer(raw_pointer)
        if pointer is None:
            return self._miss(entry, INVALIDATION_POINTER_CORRUPT)
        if pointer["inputDigest"] != entry.input_digest:
            return self._miss(entry, INVALIDATION_INPUT_CHANGED)

        object_path = self._objects_dir / f"{pointer['objectDigest']}{CACHE_ENTRY_SUFFIX}"
        try:
            raw_object = load_json_file(object_path)
        except FileNotFoundError:
            return self._miss(entry, INVALIDATION_OBJECT_MISSING)
        except OSError:
            return self._miss(entry, INVALIDATION_OBJECT_READ_ERROR)
        except ValueError:
            return self._miss(entry, INVALIDATION_OBJECT_CORRUPT)

        if not isinstance(raw_object, dict) or not isinstance(raw_object.get("report"), dict):
            return self._miss(entry, INVALIDATION_OBJECT_CORRUPT)

        self._metadata.hits += 1
        logger.debug("Analysis cache hit for %s", entry.key_label)
        return Report.from_dict(raw_object["report"]), True

    def store(self, entry: CacheEntry, report: Report) -> None:
        """Persist *report* for *entry*; a no-op when disabled or read-only.

        Raises ``OSError`` when the object or pointer cannot be written.
        """
        if not self.active or self._options.read_only or entry.is_empty:
            return

        payload: CachedReportPayload = {"report": report.to_dict()}
        serialized_payload = canonical_json_bytes(payload)
        object_digest = sha256_hex(serialized_payload)
        object_path = self._objects_dir / f"{object_digest}{CACHE_ENTRY_SUFFIX}"
        try:
            object_path.stat()
        except FileNotFoundError:
            write_bytes_atomic(
                path=object_path,
                data=serialized_payload,
                temp_infix=CACHE_TEMP_INFIX,
                mode=CACHE_FILE_MODE,
            )

        pointer: CachePointerPayload = {"inputDigest": entry.input_digest, "objectDigest": object_digest}
        write_bytes_atomic(
            path=self._keys_dir / f"{entry.key_digest}{CACHE_ENTRY_SUFFIX}",
            data=canonical_json_bytes(pointer),
            temp_infix=CACHE_TEMP_INFIX,
            mode=CACHE_FILE_MODE,
        )
        self._metadata.writes += 1
        logger.debug("Analysis cache stored %s as %s", entry.key_label, object_digest)

    def _miss(self, entry: CacheEntry, reason: InvalidationReason | None) -> tuple[None, bool]:
        self._metadata.misses += 1
        if reason is not None:
            self._metadata.invalidations.append(CacheInvalidation(key=entry.key_label, reason=reason))
            logger.debug("Analysis cache invalidated %s: %s", entry.key_label, reason)
        return None, False


def compute_input_digest(root: Path, config_path: str = "") -> str:
    """Hash the sorted file records under *root* plus the optional config file.

    The config record uses the ``missing`` sentinel when the file is absent so
    that creating it later changes the digest.
    """
    records = collect_file_records(root)
    config_path = config_path.strip()
    if config_path:
        config_digest = file_sha256_or_missing(Path(config_path))
        records.append(
            RECORD_SEPARATOR.join(["config", os.path.normpath(config_path), config_digest]),
        )
    records.sort()

    digest = hashlib.sha256()
    for record in records:
        digest.update(record.encode("utf-8"))
        digest.update(b"\n")
    return digest.hexdigest()


def _parse_pointer(raw: object) -> CachePointerPayload | None:
    if not isinstance(raw, dict):
        return None
    input_digest = raw.get("inputDigest")
    object_digest = raw.get("objectDigest")
    if not isinstance(input_digest, str) or not isinstance(object_digest, str):
        return None
    if not _DIGEST_PATTERN.match(object_digest):
        return None
    return {"inputDigest": input_digest, "objectDigest": object_digest}
