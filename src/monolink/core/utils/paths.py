"""Path helpers shared by the workspace engine and configuration loading.

Centralizes:
- project/user configuration directory resolution
- containment checks on resolved paths
- relative symlink target computation
- scoped working-directory changes for external tools
"""
from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_CONFIG_DIR = ".monolink"
DEFAULT_USER_CONFIG_DIR = ".monolink"
USER_CONFIG_ENV = "MONOLINK_USER_CONFIG_DIR"


def get_project_config_dir(repo_root: Path) -> Path:
    """Return ``<repo_root>/.monolink``."""
    return Path(repo_root) / DEFAULT_PROJECT_CONFIG_DIR


def get_user_config_dir() -> Path:
    """Return the user-level configuration directory.

    ``MONOLINK_USER_CONFIG_DIR`` takes precedence; relative values are
    resolved against the home directory.
    """
    raw = os.environ.get(USER_CONFIG_ENV, "").strip()
    if raw:
        candidate = Path(raw).expanduser()
        if not candidate.is_absolute():
            candidate = Path.home() / candidate
        return candidate
    return Path.home() / DEFAULT_USER_CONFIG_DIR


def is_within(path: Path, root: Path) -> bool:
    """Return True when resolved ``path`` is ``root`` or lives beneath it."""
    try:
        Path(path).resolve().relative_to(Path(root).resolve())
    except ValueError:
        return False
    return True


def relative_link_target(source_dir: Path, link_path: Path) -> Path:
    """Compute the symlink target that reaches ``source_dir`` from ``link_path``.

    The result is relative to the directory that will contain the link, so
    resolving ``link_path.parent / result`` lands on ``source_dir``.
    """
    source = Path(source_dir).resolve()
    parent = Path(link_path).parent.resolve()
    return Path(os.path.relpath(source, parent))


@contextlib.contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Temporarily change the process working directory.

    The previous directory is restored on exit, including when the body raises.
    """
    previous = Path.cwd()
    target = Path(path)
    logger.debug("Entering %s", target)
    os.chdir(target)
    try:
        yield target
    finally:
        os.chdir(previous)
        logger.debug("Restored working directory %s", previous)


__all__ = [
    "DEFAULT_PROJECT_CONFIG_DIR",
    "DEFAULT_USER_CONFIG_DIR",
    "USER_CONFIG_ENV",
    "get_project_config_dir",
    "get_user_config_dir",
    "is_within",
    "relative_link_target",
    "working_directory",
]
