"""Crash-safe file writes and timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone
import os
from pathlib import Path
import tempfile

from ..errors import StorageWriteError


RFC3339_UTC = "%Y-%m-%dT%H:%M:%SZ"


def utc_now_rfc3339() -> str:
    """Current UTC time as "YYYY-MM-DDTHH:MM:SSZ"."""
    return datetime.now(timezone.utc).strftime(RFC3339_UTC)


def atomic_write_text(path: Path, text: str) -> None:
    """Write text to path via a temp file in the same directory and a rename.

    Readers either see the previous file or the complete new one. The temp
    file is removed if anything fails before the rename completes.

    Args:
        path: Destination file
        text: Full file contents (written as UTF-8)

    Raises:
        StorageWriteError: On any I/O failure
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise StorageWriteError(f"cannot create temp file for {path}: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise StorageWriteError(f"cannot write {path}: {exc}") from exc
