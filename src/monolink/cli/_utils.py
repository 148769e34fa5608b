"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from monolink.core.config.domains import LoggingConfig
from monolink.core.logging import configure_logging


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from ``--repo-root`` or the current directory."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return Path.cwd().resolve()


def resolve_roots(args: argparse.Namespace, repo_root: Path) -> Optional[List[Path]]:
    """Resolve ``--roots`` against ``repo_root``; None when not given."""
    raw = getattr(args, "roots", None)
    if not raw:
        return None
    out: List[Path] = []
    for value in raw:
        path = Path(value).expanduser()
        out.append(path if path.is_absolute() else (repo_root / path).resolve())
    return out


def configure_cli_logging(args: argparse.Namespace, repo_root: Path) -> None:
    """Apply ``logging`` config plus the --verbose/--debug/--json flags."""
    cfg = LoggingConfig(repo_root=repo_root)
    level = cfg.level
    if getattr(args, "debug", False):
        level = "DEBUG"
    elif getattr(args, "verbose", False):
        level = "INFO"
    configure_logging(level, cfg.file, json_mode=bool(getattr(args, "json", False)))


__all__ = ["configure_cli_logging", "get_repo_root", "resolve_roots"]
