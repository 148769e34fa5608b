"""Domain-specific configuration accessors."""
from __future__ import annotations

from .link import LinkConfig
from .logging import LoggingConfig

__all__ = ["LinkConfig", "LoggingConfig"]
