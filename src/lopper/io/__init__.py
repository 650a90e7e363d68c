"""Shared file I/O helpers."""

from .files import file_sha256, file_sha256_or_missing
from .json_io import load_json_file, write_bytes_atomic

__all__ = ["file_sha256", "file_sha256_or_missing", "load_json_file", "write_bytes_atomic"]
