"""Domain-specific configuration for workspace linking.

Reads the ``link`` section:

    link:
      scopeRoots:
        "@acme": ../acme-packages
      externals: ["@shared/", "lodash-es"]
      roots: ["."]
      packageManager: npm
      workspaceFile: pnpm-workspace.yaml
      dryRun: false
      packageArgument: "@acme"
      scanWorkers: 4
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Dict, List, Optional

from ..base import BaseDomainConfig


class LinkConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "link"

    @cached_property
    def scope_roots(self) -> Dict[str, Path]:
        """Scope prefix -> resolved fallback directory."""
        raw = self.section.get("scopeRoots") or {}
        return {str(scope): self._resolve_path(str(path)) for scope, path in raw.items()}

    @cached_property
    def externals(self) -> List[str]:
        return [str(p) for p in (self.section.get("externals") or []) if str(p).strip()]

    @cached_property
    def roots(self) -> List[Path]:
        raw = self.section.get("roots") or ["."]
        return [self._resolve_path(str(r)) for r in raw]

    @cached_property
    def package_manager(self) -> str:
        return str(self.section.get("packageManager") or "npm")

    @cached_property
    def workspace_file(self) -> Optional[Path]:
        raw = self.section.get("workspaceFile")
        if not raw:
            return None
        return self._resolve_path(str(raw))

    @cached_property
    def dry_run(self) -> bool:
        return bool(self.section.get("dryRun", False))

    @cached_property
    def package_argument(self) -> Optional[str]:
        raw = self.section.get("packageArgument")
        return str(raw) if raw else None

    @cached_property
    def scan_workers(self) -> int:
        return max(1, int(self.section.get("scanWorkers", 4) or 4))


__all__ = ["LinkConfig"]
