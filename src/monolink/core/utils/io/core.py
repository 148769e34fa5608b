"""Atomic file writes and small read helpers shared by the JSON and YAML modules."""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, TextIO


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) if needed; refuse paths that are files."""
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Path exists but is not a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, write_fn: Callable[[TextIO], None], *, encoding: str = "utf-8") -> None:
    """Write ``path`` through a locked, fsync'd sibling temp file and ``os.replace``.

    Readers see either the old content or the new content, never a partial
    manifest. The temp file is removed when ``write_fn`` raises.
    """
    path = Path(path)
    ensure_directory(path.parent)

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding=encoding, dir=str(path.parent), prefix=f".{path.name}.", delete=False
        ) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)


def read_text(path: Path | str) -> str:
    """Read a UTF-8 file, raising FileNotFoundError with the path when it is absent."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Text file not found: {path}")
    return path.read_text(encoding="utf-8")


__all__ = ["atomic_write", "ensure_directory", "read_text"]
