"""Constants used by the analysis result cache and hashing."""

from __future__ import annotations

from lopper.types.common import InvalidationReason

CACHE_SCHEMA_VERSION: str = "v1"
CACHE_DIRNAME: str = ".lopper-cache"
CACHE_KEYS_DIRNAME: str = "keys"
CACHE_OBJECTS_DIRNAME: str = "objects"
CACHE_ENTRY_SUFFIX: str = ".json"
CACHE_TEMP_INFIX: str = ".tmp-"

CACHE_DIR_MODE: int = 0o750
CACHE_FILE_MODE: int = 0o600

FILE_HASH_CHUNK_SIZE: int = 65536
MISSING_FILE_DIGEST: str = "missing"

# Invalidation reason codes recorded when an existing pointer cannot be served.
INVALIDATION_POINTER_CORRUPT: InvalidationReason = "pointer-corrupt"
INVALIDATION_INPUT_CHANGED: InvalidationReason = "input-changed"
INVALIDATION_OBJECT_MISSING: InvalidationReason = "object-missing"
INVALIDATION_OBJECT_READ_ERROR: InvalidationReason = "object-read-error"
INVALIDATION_OBJECT_CORRUPT: InvalidationReason = "object-corrupt"
