"""Read-only link status report for a set of packages."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from monolink.core.utils.paths import is_within

from .compat import check_linked_dependencies, find_compatibility_problems
from .exceptions import WorkspaceError
from .manifest import ManifestStore
from .models import (
    SCOPE_MARKER,
    CompatibilityVerdict,
    LinkedDependency,
    PackageLinkStatus,
    PackageLocation,
)
from .reconciler import NODE_MODULES

logger = logging.getLogger(__name__)

INTERNAL = "internal"
EXTERNAL = "external"


def iter_linked_slots(package_dir: Path) -> Iterator[tuple[str, Path]]:
    """Yield ``(dependency name, slot)`` for every symlinked slot in node_modules.

    Directories that cannot be listed are skipped.
    """
    modules = Path(package_dir) / NODE_MODULES
    if not modules.is_dir():
        return
    for entry in _sorted_entries(modules):
        if entry.name.startswith(SCOPE_MARKER) and entry.is_dir() and not entry.is_symlink():
            for scoped in _sorted_entries(entry):
                if scoped.is_symlink():
                    yield f"{entry.name}/{scoped.name}", scoped
        elif entry.is_symlink():
            yield entry.name, entry


def _sorted_entries(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as exc:
        logger.warning("Skipping unreadable %s: %s", directory, exc)
        return []


class LinkStatusCollector:
    def __init__(self, workspace_roots: Sequence[Path], manifest_store: ManifestStore | None = None) -> None:
        self.workspace_roots = [Path(r).resolve() for r in workspace_roots]
        self.manifest_store = manifest_store or ManifestStore()

    def classify(self, resolved: Path) -> str:
        """``internal`` when ``resolved`` lies inside a workspace root."""
        if any(is_within(resolved, root) for root in self.workspace_roots):
            return INTERNAL
        return EXTERNAL

    def _links(self, location: PackageLocation) -> list[tuple[str, str, Path]]:
        links = []
        for name, slot in iter_linked_slots(location.directory):
            try:
                target = os.readlink(slot)
            except OSError as exc:
                logger.warning("Cannot read link %s in %s: %s", name, location.directory, exc)
                continue
            links.append((name, target, (slot.parent / target).resolve()))
        return links

    def _version_behind(self, name: str, resolved: Path) -> str | None:
        try:
            return self.manifest_store.read_directory(resolved).version
        except WorkspaceError as exc:
            logger.debug("No readable manifest behind %s: %s", name, exc)
            return None

    def _versions(self, links: Iterable[tuple[str, str, Path]]) -> dict[str, str]:
        versions = {}
        for name, _target, resolved in links:
            version = self._version_behind(name, resolved)
            if version:
                versions[name] = version
        return versions

    def linked_versions(self, location: PackageLocation) -> dict[str, str]:
        """Map each symlinked dependency of ``location`` to the version it resolves to."""
        return self._versions(self._links(location))

    def incompatible(self, location: PackageLocation) -> list[CompatibilityVerdict]:
        """Verdicts for the links of ``location`` that fall outside their declared range."""
        manifest = location.manifest
        versions = self.linked_versions(location)
        declared = manifest.all_dependencies()
        return [
            CompatibilityVerdict(
                dependency=name,
                linked_version=versions[name],
                declared_range=declared[name],
                compatible=False,
            )
            for name in sorted(find_compatibility_problems(manifest, versions))
        ]

    def package_status(self, location: PackageLocation) -> PackageLinkStatus:
        links = self._links(location)
        verdicts = {
            verdict.dependency: verdict
            for verdict in check_linked_dependencies(location.manifest, self._versions(links))
        }
        return PackageLinkStatus(
            name=location.name or str(location.relative_path),
            path=location.directory,
            links=tuple(
                LinkedDependency(
                    name=name,
                    target=target,
                    location=self.classify(resolved),
                    verdict=verdicts.get(name),
                )
                for name, target, resolved in links
            ),
        )

    def collect(self, locations: Iterable[PackageLocation]) -> list[PackageLinkStatus]:
        return [self.package_status(location) for location in locations]


__all__ = ["EXTERNAL", "INTERNAL", "LinkStatusCollector", "iter_linked_slots"]
