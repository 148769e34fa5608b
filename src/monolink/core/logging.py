"""Stdlib logging configuration for the monolink CLI.

Handlers are attached to the ``monolink`` package logger so library users
embedding the core keep control over the root logger.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from monolink.core.utils.io import ensure_directory

PACKAGE_LOGGER = "monolink"
STREAM_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_STREAM_HANDLER: logging.Handler | None = None
_FILE_HANDLER: logging.Handler | None = None


def level_from_name(name: str) -> int:
    value = logging.getLevelName(str(name).upper())
    return value if isinstance(value, int) else logging.WARNING


def _drop(logger: logging.Logger, handler: logging.Handler | None) -> None:
    if handler is None:
        return
    logger.removeHandler(handler)
    handler.close()


def configure_logging(level: str = "WARNING", log_file: Path | None = None, *, json_mode: bool = False) -> None:
    """Install monolink's handlers.

    Idempotent per-process: repeated calls replace the previously installed
    handlers instead of stacking new ones. In ``json_mode`` no stream handler
    is installed so stdout/stderr stay machine-readable.
    """
    global _STREAM_HANDLER, _FILE_HANDLER

    logger = logging.getLogger(PACKAGE_LOGGER)
    numeric = level_from_name(level)
    logger.setLevel(numeric)

    _drop(logger, _STREAM_HANDLER)
    _STREAM_HANDLER = None
    _drop(logger, _FILE_HANDLER)
    _FILE_HANDLER = None

    if not json_mode:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(numeric)
        sh.setFormatter(logging.Formatter(STREAM_FORMAT))
        logger.addHandler(sh)
        _STREAM_HANDLER = sh

    if log_file is not None:
        path = Path(log_file)
        ensure_directory(path.parent)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(numeric)
        fh.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(fh)
        _FILE_HANDLER = fh
    elif json_mode:
        # Keep the last-resort stderr handler from printing warnings.
        nh = logging.NullHandler()
        logger.addHandler(nh)
        _STREAM_HANDLER = nh


def reset_logging_for_tests() -> None:
    """Test-only: remove every handler from the package logger."""
    global _STREAM_HANDLER, _FILE_HANDLER
    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)
    _STREAM_HANDLER = None
    _FILE_HANDLER = None


__all__ = [
    "FILE_FORMAT",
    "STREAM_FORMAT",
    "configure_logging",
    "level_from_name",
    "reset_logging_for_tests",
]
