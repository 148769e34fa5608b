"""monolink configuration system.

This package provides layered configuration with domain-specific accessors.

Usage:
    from monolink.core.config import ConfigManager
    from monolink.core.config.domains import LinkConfig

    # Direct config manager usage
    manager = ConfigManager(repo_root=Path("/path/to/workspace"))
    config = manager.load_config()

    # Domain-specific accessors (recommended)
    link = LinkConfig(repo_root=Path("/path/to/workspace"))
    roots = link.scope_roots

    # Cached config access
    from monolink.core.config.cache import get_cached_config, clear_all_caches
    config = get_cached_config(repo_root)
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig

from .domains import LinkConfig, LoggingConfig

__all__ = [
    # Core
    "ConfigManager",
    "BaseDomainConfig",
    # Caching
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    # Domain configs
    "LinkConfig",
    "LoggingConfig",
]
