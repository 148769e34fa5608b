"""pnpm-style workspace override file (``pnpm-workspace.yaml``).

Linked packages are recorded as ``overrides: {name: "link:<relative path>"}``
so the package manager's own installer keeps the links. Every other key in
the file is preserved.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from monolink.core.utils.io import read_yaml, write_yaml

from .exceptions import WorkspaceFileError

logger = logging.getLogger(__name__)

LINK_PROTOCOL = "link:"


class WorkspaceOverrides:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        try:
            data = read_yaml(self.path, default={}, raise_on_error=True)
        except FileNotFoundError:
            return {}
        except (OSError, yaml.YAMLError) as exc:
            raise WorkspaceFileError(
                f"Cannot read workspace file {self.path}: {exc}", context={"path": str(self.path)}
            ) from exc
        if not isinstance(data, dict):
            raise WorkspaceFileError(
                f"Workspace file {self.path} must contain a mapping", context={"path": str(self.path)}
            )
        return data

    def overrides(self) -> dict[str, str]:
        raw = self.load().get("overrides") or {}
        return {str(k): str(v) for k, v in raw.items()}

    def link_value(self, source_dir: Path) -> str:
        rel = os.path.relpath(Path(source_dir).resolve(), self.path.parent.resolve())
        return f"{LINK_PROTOCOL}{Path(rel).as_posix()}"

    def record_links(self, links: Mapping[str, Path]) -> dict[str, str]:
        """Merge ``{name: source_dir}`` as link overrides and write the file."""
        data = self.load()
        merged = dict(data.get("overrides") or {})
        for name, source_dir in links.items():
            merged[name] = self.link_value(source_dir)
        data["overrides"] = {name: merged[name] for name in sorted(merged)}
        self._write(data)
        logger.info("Recorded %d link override(s) in %s", len(links), self.path)
        return data["overrides"]

    def remove(self, names: Iterable[str]) -> list[str]:
        """Drop overrides for ``names``; returns the names actually removed."""
        if not self.path.exists():
            return []
        data = self.load()
        current = dict(data.get("overrides") or {})
        removed = [name for name in names if name in current]
        if not removed:
            return []
        for name in removed:
            del current[name]
        if current:
            data["overrides"] = {name: current[name] for name in sorted(current)}
        else:
            data.pop("overrides", None)
        self._write(data)
        logger.info("Removed %d link override(s) from %s", len(removed), self.path)
        return removed

    def _write(self, data: dict[str, Any]) -> None:
        try:
            write_yaml(self.path, data, sort_keys=False)
        except OSError as exc:
            raise WorkspaceFileError(
                f"Cannot write workspace file {self.path}: {exc}", context={"path": str(self.path)}
            ) from exc


__all__ = ["LINK_PROTOCOL", "WorkspaceOverrides"]
