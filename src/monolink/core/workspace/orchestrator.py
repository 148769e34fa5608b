"""Link orchestrator: self-link, targeted link, unlink and status.

Self-link is best-effort: only registering the current package (or reading
its manifest) is fatal, and each dependency succeeds or fails on its own.
Targeted linking is all-or-nothing: the first source or consumer failure
aborts the run.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from monolink.core.config.domains import LinkConfig
from monolink.core.utils.paths import working_directory

from .exceptions import (
    ConsumerLinkError,
    LinkArgumentError,
    MissingPackageNameError,
    PackageManagerError,
    SelfLinkError,
    SourceLinkError,
    WorkspaceError,
    WorkspaceFileError,
)
from .index import PackageIndex
from .manifest import ManifestStore
from .models import (
    SCOPE_MARKER,
    CompatibilityVerdict,
    LinkSummary,
    Manifest,
    PackageLinkStatus,
    PackageLocation,
    ReconcileResult,
    scope_of,
    unscoped_name,
)
from .overrides import WorkspaceOverrides
from .package_manager import PackageManager
from .reconciler import SymlinkReconciler
from .registry import LinkRegistryReader
from .scanner import TreeScanner
from .status import LinkStatusCollector

logger = logging.getLogger(__name__)


def matches_external(name: str, pattern: str) -> bool:
    """Match ``name`` against an ``externals`` pattern.

    Patterns ending in ``/`` or ``*`` are prefixes, a bare ``@scope`` covers
    the whole scope, anything else must match exactly.
    """
    if pattern.endswith("/") or pattern.endswith("*"):
        return name.startswith(pattern.rstrip("*"))
    if pattern.startswith(SCOPE_MARKER) and "/" not in pattern:
        return name.startswith(f"{pattern}/")
    return name == pattern


class LinkOrchestrator:
    def __init__(
        self,
        root: Path,
        config: LinkConfig | None = None,
        package_manager: PackageManager | None = None,
        manifest_store: ManifestStore | None = None,
        dry_run: bool = False,
    ) -> None:
        self.root = Path(root).resolve()
        self.config = config or LinkConfig(repo_root=self.root)
        self.package_manager = package_manager or PackageManager(self.config.package_manager)
        self.manifest_store = manifest_store or ManifestStore()
        self.dry_run = dry_run or self.config.dry_run

        self.scanner = TreeScanner(self.manifest_store, max_workers=self.config.scan_workers)
        self.index = PackageIndex(self.scanner)
        self.registry = LinkRegistryReader(self.package_manager, self.manifest_store)
        self.reconciler = SymlinkReconciler()
        workspace_file = self.config.workspace_file
        self.overrides = WorkspaceOverrides(workspace_file) if workspace_file else None

    # ---------- helpers ----------

    def _current_manifest(self) -> Manifest:
        manifest = self.manifest_store.read_directory(self.root)
        if not manifest.name:
            raise MissingPackageNameError(self.root / "package.json")
        return manifest

    def link_candidates(self, manifest: Manifest) -> list[str]:
        """Same-scope dependencies plus those matching an ``externals`` pattern."""
        own_scope = scope_of(manifest.name or "")
        candidates: list[str] = []
        for dep in manifest.all_dependencies():
            if own_scope is not None and scope_of(dep) == own_scope:
                candidates.append(dep)
            elif any(matches_external(dep, p) for p in self.config.externals):
                candidates.append(dep)
        return candidates

    def _find_in_scope_root(self, name: str) -> Path | None:
        scope = scope_of(name)
        scope_root = self.config.scope_roots.get(scope) if scope else None
        if scope_root is None or not scope_root.is_dir():
            return None

        conventional = scope_root / unscoped_name(name)
        try:
            siblings = sorted(p for p in scope_root.iterdir() if p.is_dir() and p != conventional)
        except OSError as exc:
            logger.warning("Cannot search scope root %s for %s: %s", scope_root, name, exc)
            return None
        candidates = [conventional] + siblings
        for directory in candidates:
            try:
                manifest = self.manifest_store.read_directory(directory)
            except WorkspaceError:
                continue
            if manifest.name == name:
                return directory
        return None

    def _resolve_from_scope_root(self, name: str) -> Path | None:
        source = self._find_in_scope_root(name)
        if source is None:
            return None
        logger.info("Registering %s from scope root %s", name, source)
        try:
            with working_directory(source):
                self.package_manager.link_self(source)
        except PackageManagerError as exc:
            logger.warning("Could not register %s globally: %s", name, exc)
        return source

    def _refresh_lockfile(self) -> None:
        try:
            with working_directory(self.root):
                self.package_manager.refresh_lockfile(self.root)
        except PackageManagerError as exc:
            logger.warning("Lock file refresh failed in %s: %s", self.root, exc)

    # ---------- self-link ----------

    def self_link(self) -> LinkSummary:
        manifest = self._current_manifest()
        name = manifest.name or ""
        candidates = self.link_candidates(manifest)

        if self.dry_run:
            if candidates:
                message = (
                    f"DRY RUN: Would self-link {name} and attempt to link "
                    f"{len(candidates)} dependencies: {', '.join(candidates)}"
                )
            else:
                message = f"DRY RUN: Would self-link {name}, no same-scope dependencies found to link"
            logger.info(message)
            return LinkSummary(message, package=name, candidates=tuple(candidates), dry_run=True)

        try:
            with working_directory(self.root):
                self.package_manager.link_self(self.root)
        except PackageManagerError as exc:
            raise SelfLinkError(name, str(exc)) from exc
        logger.info("Registered %s in the global link registry", name)

        if not candidates:
            return LinkSummary(f"Self-linked {name}, no same-scope dependencies to link", package=name)

        global_links = self.registry.list_global_links()
        results: list[ReconcileResult] = []
        linked: list[str] = []
        sources: dict[str, Path] = {}
        for dep in candidates:
            source = global_links.get(dep) or self._resolve_from_scope_root(dep)
            if source is None:
                logger.info("%s is not available to link", dep)
                continue
            result = self.reconciler.reconcile(dep, source, self.root)
            results.append(result)
            if result.success:
                linked.append(dep)
                sources[dep] = source

        if not linked:
            message = f"Self-linked {name}, no same-scope dependencies were available to link"
            return LinkSummary(message, package=name, candidates=tuple(candidates), results=tuple(results))

        if self.overrides is not None:
            try:
                self.overrides.record_links(sources)
            except WorkspaceFileError as exc:
                logger.warning("%s", exc)
        self._refresh_lockfile()

        message = (
            f"Self-linked {name} and linked {len(linked)} of {len(candidates)} "
            f"dependencies: {', '.join(linked)}"
        )
        return LinkSummary(
            message,
            package=name,
            candidates=tuple(candidates),
            linked=tuple(linked),
            results=tuple(results),
        )

    # ---------- targeted link ----------

    def link_target(self, target: str, roots: Sequence[Path] | None = None) -> LinkSummary:
        target = target.strip()
        if not target.startswith(SCOPE_MARKER):
            raise LinkArgumentError(target)

        if "/" in target:
            scope, exact_name = target.split("/", 1)[0], target
        else:
            scope, exact_name = target, None

        search_roots = list(roots) if roots else self.config.roots
        matches = self.index.find_by_scope(search_roots, scope, exact_name)
        if not matches:
            if exact_name is not None:
                return LinkSummary(f"No package found matching: {exact_name}", package=target)
            return LinkSummary(f"No packages found in scope: {scope}", package=target)

        names = [m.name for m in matches]
        if self.dry_run:
            consumer_count = sum(len(self.index.find_consumers(search_roots, m.name)) for m in matches)
            message = (
                f"DRY RUN: Would link {len(matches)} package(s) into "
                f"{consumer_count} consumer(s): {', '.join(names)}"
            )
            logger.info(message)
            return LinkSummary(message, package=target, candidates=tuple(names), dry_run=True)

        for match in matches:
            try:
                with working_directory(match.path):
                    self.package_manager.link_self(match.path)
            except PackageManagerError as exc:
                raise SourceLinkError(match.name, str(exc)) from exc
            logger.info("Registered %s from %s", match.name, match.path)

            for consumer in self.index.find_consumers(search_roots, match.name):
                try:
                    with working_directory(consumer.path):
                        self.package_manager.link_package(match.name, consumer.path)
                except PackageManagerError as exc:
                    raise ConsumerLinkError(match.name, consumer.name, str(exc)) from exc
                logger.info("Linked %s into %s", match.name, consumer.name)

        if self.overrides is not None:
            self.overrides.record_links({m.name: m.path for m in matches})

        return LinkSummary(
            f"Successfully linked {len(matches)} package(s): {', '.join(names)}",
            package=target,
            candidates=tuple(names),
            linked=tuple(names),
        )

    # ---------- unlink ----------

    def unlink_self(self, unregister: bool = False) -> LinkSummary:
        """Remove symlinked slots for every link candidate of the current package.

        With ``unregister`` the package is also dropped from the global link
        registry; a failure there is only logged.
        """
        manifest = self._current_manifest()
        name = manifest.name or ""
        candidates = self.link_candidates(manifest)

        results = [self.reconciler.remove(dep, self.root, dry_run=self.dry_run) for dep in candidates]
        removed = [r.dependency for r in results if r.action in ("removed", "would-remove") and r.success]

        if self.dry_run:
            message = (
                f"DRY RUN: Would unlink {len(removed)} dependencies from {name}: {', '.join(removed)}"
                if removed
                else f"DRY RUN: No linked dependencies to unlink in {name}"
            )
            return LinkSummary(
                message, package=name, candidates=tuple(candidates), results=tuple(results), dry_run=True
            )

        if unregister:
            try:
                with working_directory(self.root):
                    self.package_manager.unlink_global(name, self.root)
            except PackageManagerError as exc:
                logger.warning("Could not remove %s from the global registry: %s", name, exc)
            else:
                logger.info("Removed %s from the global link registry", name)

        if self.overrides is not None:
            self.overrides.remove(candidates)
        if not removed:
            return LinkSummary(
                f"No linked dependencies to unlink in {name}",
                package=name,
                candidates=tuple(candidates),
                results=tuple(results),
            )

        self._refresh_lockfile()
        return LinkSummary(
            f"Unlinked {len(removed)} of {len(candidates)} dependencies from {name}: {', '.join(removed)}",
            package=name,
            candidates=tuple(candidates),
            linked=tuple(removed),
            results=tuple(results),
        )

    # ---------- status ----------

    def status(self, roots: Sequence[Path] | None = None) -> list[PackageLinkStatus]:
        search_roots = [Path(r).resolve() for r in roots] if roots else self.config.roots
        collector = LinkStatusCollector(search_roots, self.manifest_store)
        return collector.collect(self.index.locations(search_roots))

    def incompatible_links(
        self, roots: Sequence[Path] | None = None
    ) -> list[tuple[PackageLocation, CompatibilityVerdict]]:
        """Linked dependencies whose version falls outside the consumer's declared range."""
        search_roots = [Path(r).resolve() for r in roots] if roots else self.config.roots
        collector = LinkStatusCollector(search_roots, self.manifest_store)
        return [
            (location, verdict)
            for location in self.index.locations(search_roots)
            for verdict in collector.incompatible(location)
        ]


__all__ = ["LinkOrchestrator", "matches_external"]
