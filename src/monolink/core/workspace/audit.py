"""Detection of manifest entries that only resolve on this machine.

Local-path and link-protocol dependencies left behind after linking break
installs in CI and for anyone else checking out the repository.
"""
from __future__ import annotations

import json
import logging
from typing import Iterable

from .models import DEPENDENCY_KINDS, PackageLocation, ProblematicDependency

logger = logging.getLogger(__name__)


def classify_dependency_value(value: str) -> tuple[str, str] | None:
    """Return ``(kind, reason)`` for a problematic range, else None."""
    if value.startswith("file:"):
        return "file:", "File dependencies cause build failures in CI/CD environments"
    if value.startswith("link:"):
        return "link:", "Link dependencies are not resolvable in remote environments"
    if "../" in value or "./" in value or value.startswith("/"):
        return "relative-path", "Relative path dependencies are not resolvable in different environments"
    if value.startswith("workspace:"):
        return "workspace", "Workspace protocol dependencies require workspace configuration"
    return None


def _is_local_override(value: object) -> bool:
    return isinstance(value, str) and (
        value.startswith("file:") or value.startswith("link:") or "../" in value
    )


def scan_for_problematic_dependencies(locations: Iterable[PackageLocation]) -> list[ProblematicDependency]:
    found: list[ProblematicDependency] = []
    for location in locations:
        manifest = location.manifest
        package = manifest.name or str(location.relative_path)

        def add(field: str, dependency: str, value: str, kind: str, reason: str) -> None:
            found.append(
                ProblematicDependency(
                    package=package,
                    path=location.directory,
                    field=field,
                    dependency=dependency,
                    value=value,
                    kind=kind,
                    reason=reason,
                )
            )

        for kind in DEPENDENCY_KINDS:
            for name, value in manifest.dependency_map(kind).items():
                problem = classify_dependency_value(value)
                if problem is not None:
                    add(kind, name, value, *problem)

        raw = manifest.raw
        if raw.get("workspaces"):
            add(
                "workspaces",
                "workspaces",
                json.dumps(raw["workspaces"]),
                "workspace",
                "Workspace configurations can cause issues when published to npm",
            )
        for field, kind, reason in (
            ("overrides", "override", "Override configurations with local paths cause build failures"),
            ("resolutions", "resolution", "Resolution configurations with local paths cause build failures"),
        ):
            entries = raw.get(field)
            if not isinstance(entries, dict):
                continue
            for name, value in entries.items():
                if _is_local_override(value):
                    add(field, str(name), str(value), kind, reason)

    logger.debug("Found %d problematic dependency declaration(s)", len(found))
    return found


__all__ = ["classify_dependency_value", "scan_for_problematic_dependencies"]
