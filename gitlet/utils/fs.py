"""Filesystem helpers."""

import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, content: bytes) -> None:
    """
    Write content to a file atomically via write-to-temp + rename.

    A reader sees either the old file or the new one, never a torn write.
    This covers a single file only; commands that update several files
    can still be interrupted between them.

    Args:
        path: Destination file
        content: Bytes to write
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        Path(tmp_path).replace(path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def atomic_write_text(path: Path, text: str) -> None:
    """Text variant of :func:`atomic_write`."""
    atomic_write(path, text.encode())
