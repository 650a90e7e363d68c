"""JSON read helpers and atomic persistence."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from contextlib import suppress
from pathlib import Path

logger = logging.getLogger(__name__)


def load_json_file(path: Path) -> object:
    """Load and parse JSON from disk.

    Raises ``OSError`` when the file cannot be read and ``ValueError`` when it
    is not valid UTF-8 JSON.
    """
    return json.loads(path.read_bytes().decode("utf-8"))


def write_bytes_atomic(
    *,
    path: Path,
    data: bytes,
    temp_infix: str,
    mode: int,
) -> None:
    """Persist bytes atomically by writing to a temp file then renaming.

    The temp file lives in the destination directory so the rename never
    crosses filesystems. Where replacing an existing file is refused by the
    platform, the destination is overwritten in place instead; readers may
    then observe a partially written file, which callers treat as corrupt.
    """
    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f"{path.name}{temp_infix}",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(data)
        os.chmod(temp_name, mode)
    except Exception:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise

    assert temp_name is not None
    try:
        os.replace(temp_name, path)
        return
    except OSError as exc:
        with suppress(FileNotFoundError):
            Path(temp_name).unlink()
        logger.debug("Atomic replace failed for %s (%s); overwriting in place", path, exc)

    _write_bytes_direct(path, data, mode)


def _write_bytes_direct(path: Path, data: bytes, mode: int) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)
