"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys include a fingerprint of ``MONOLINK_*`` environment
variables and of the user/project config files so edits are picked up.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from monolink.core.utils.io import iter_yaml_files
from monolink.core.utils.paths import get_project_config_dir, get_user_config_dir

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return Path.cwd().resolve()
    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(d: Path) -> List[Tuple[str, int, int]]:
    files: List[Tuple[str, int, int]] = []
    for p in iter_yaml_files(d):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(repo_root: Path, validate: bool) -> str:
    env_items = sorted(
        (k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith("MONOLINK_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    cfg_files = {
        "project": _fingerprint_dir(get_project_config_dir(repo_root) / "config"),
        "user": _fingerprint_dir(get_user_config_dir() / "config"),
    }
    cfg_fp = hashlib.sha256(repr(cfg_files).encode("utf-8")).hexdigest()[:12]
    return f"{repo_root}:validate={validate}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same repo_root and
    fingerprint, avoiding repeated file I/O.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root, validate)

    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(repo_root=normalized_root)
        _config_cache[key] = manager._load_config_uncached(validate=validate)

    # NOTE: returns the cached dict instance (treat as immutable)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the configuration cache."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, validate: bool = True) -> bool:
    """Check if config for repo_root is cached."""
    normalized_root = _normalize_repo_root(repo_root)
    return _cache_key(normalized_root, validate) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
