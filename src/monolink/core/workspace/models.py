"""Workspace data models.

Provides immutable dataclasses for manifests, scan results, link
reconciliation outcomes and status reports. Everything here is
request-scoped: built during one invocation and discarded afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

DEPENDENCY_KINDS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)

SCOPE_MARKER = "@"


def scope_of(name: str) -> str | None:
    """Return ``@scope`` for ``@scope/name``, else None."""
    if name.startswith(SCOPE_MARKER) and "/" in name:
        return name.split("/", 1)[0]
    return None


def unscoped_name(name: str) -> str:
    """Return ``name`` for ``@scope/name`` (unscoped names pass through)."""
    if scope_of(name) is not None:
        return name.split("/", 1)[1]
    return name


@dataclass(frozen=True, slots=True)
class Manifest:
    """A validated package manifest.

    Attributes:
        name: Package name (None when the manifest declares none)
        version: Declared version string
        dependencies: Runtime dependency ranges
        devDependencies: Development dependency ranges
        peerDependencies: Peer dependency ranges
        optionalDependencies: Optional dependency ranges
        raw: The complete parsed document, for round-tripping unknown keys
    """

    name: str | None = None
    version: str | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    devDependencies: dict[str, str] = field(default_factory=dict)
    peerDependencies: dict[str, str] = field(default_factory=dict)
    optionalDependencies: dict[str, str] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def dependency_map(self, kind: str) -> dict[str, str]:
        return getattr(self, kind)

    def all_dependencies(self) -> dict[str, str]:
        """Merge every dependency map; earlier kinds win on conflicts."""
        merged: dict[str, str] = {}
        for kind in DEPENDENCY_KINDS:
            for dep, declared in self.dependency_map(kind).items():
                merged.setdefault(dep, declared)
        return merged

    def declared_range(self, name: str) -> str | None:
        for kind in DEPENDENCY_KINDS:
            declared = self.dependency_map(kind).get(name)
            if declared is not None:
                return declared
        return None

    def dependency_kinds(self, name: str) -> list[str]:
        return [kind for kind in DEPENDENCY_KINDS if name in self.dependency_map(kind)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to a manifest document, preserving unknown keys."""
        result: dict[str, Any] = dict(self.raw)
        if self.name is not None:
            result["name"] = self.name
        if self.version is not None:
            result["version"] = self.version
        for kind in DEPENDENCY_KINDS:
            deps = self.dependency_map(kind)
            if deps or kind in result:
                result[kind] = dict(deps)
        return result


@dataclass(frozen=True, slots=True)
class PackageLocation:
    """A manifest discovered by the tree scanner.

    Attributes:
        manifest_path: Absolute path to package.json
        directory: Directory containing the manifest
        relative_path: ``directory`` relative to the scan root ("." for the root)
        manifest: Parsed manifest
    """

    manifest_path: Path
    directory: Path
    relative_path: Path
    manifest: Manifest

    @property
    def name(self) -> str | None:
        return self.manifest.name


@dataclass(frozen=True, slots=True)
class PackageMatch:
    """A package selected by a scope or exact-name query."""

    name: str
    path: Path
    is_source_match: bool

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "path": str(self.path), "isSourceMatch": self.is_source_match}


@dataclass(frozen=True, slots=True)
class ConsumerPackage:
    """A package whose manifest depends on a given package name."""

    name: str
    path: Path
    dependency_kinds: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "dependencyKinds": list(self.dependency_kinds),
        }


class SymlinkState(str, Enum):
    """What currently occupies a dependency slot."""

    MISSING = "missing"
    CORRECT_SYMLINK = "correct-symlink"
    WRONG_SYMLINK = "wrong-symlink"
    OCCUPIED_BY_DIRECTORY = "occupied-by-directory"
    OCCUPIED_BY_FILE = "occupied-by-file"


@dataclass(frozen=True, slots=True)
class SlotInspection:
    state: SymlinkState
    current_target: str | None = None


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Outcome of reconciling one dependency slot.

    Attributes:
        dependency: Dependency name
        slot: Path of the dependency slot inside node_modules
        target: Relative symlink target that was (or would be) written
        state: Slot state observed before any change
        action: created/fixed/unchanged/replaced-directory/replaced-file,
            or their ``would-`` forms in dry-run mode
        success: False when a filesystem error stopped the reconciliation
        mutations: Number of filesystem changes performed
        error: Failure message when ``success`` is False
    """

    dependency: str
    slot: Path
    target: str
    state: SymlinkState
    action: str
    success: bool = True
    mutations: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "dependency": self.dependency,
            "slot": str(self.slot),
            "target": self.target,
            "state": self.state.value,
            "action": self.action,
            "success": self.success,
            "mutations": self.mutations,
        }
        if self.error:
            result["error"] = self.error
        return result


@dataclass(frozen=True, slots=True)
class CompatibilityVerdict:
    dependency: str
    linked_version: str | None
    declared_range: str | None
    compatible: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "dependency": self.dependency,
            "linkedVersion": self.linked_version,
            "declaredRange": self.declared_range,
            "compatible": self.compatible,
        }


@dataclass(frozen=True, slots=True)
class LinkedDependency:
    """A dependency slot that is currently a symlink.

    ``location`` is ``internal`` when the link resolves inside the scanned
    workspace and ``external`` otherwise.
    """

    name: str
    target: str
    location: str
    verdict: CompatibilityVerdict | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "target": self.target,
            "location": self.location,
        }
        if self.verdict is not None:
            result["compatibility"] = self.verdict.to_dict()
        return result


@dataclass(frozen=True, slots=True)
class PackageLinkStatus:
    name: str
    path: Path
    links: tuple[LinkedDependency, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "links": [link.to_dict() for link in self.links],
        }


@dataclass(frozen=True, slots=True)
class LinkSummary:
    """Aggregate outcome of one orchestrator run.

    Attributes:
        message: Human-readable summary line
        package: Package the run was about (current package or target)
        candidates: Dependencies or packages considered for linking
        linked: Names actually linked (or that would be, in dry-run)
        results: Per-slot reconciliation outcomes
        dry_run: Whether the run was report-only
    """

    message: str
    package: str | None = None
    candidates: tuple[str, ...] = ()
    linked: tuple[str, ...] = ()
    results: tuple[ReconcileResult, ...] = ()
    dry_run: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "package": self.package,
            "candidates": list(self.candidates),
            "linked": list(self.linked),
            "results": [r.to_dict() for r in self.results],
            "dryRun": self.dry_run,
        }


@dataclass(frozen=True, slots=True)
class ProblematicDependency:
    """A manifest entry that points at a local path or link protocol."""

    package: str
    path: Path
    field: str
    dependency: str
    value: str
    kind: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "package": self.package,
            "path": str(self.path),
            "field": self.field,
            "dependency": self.dependency,
            "value": self.value,
            "kind": self.kind,
            "reason": self.reason,
        }


__all__ = [
    "DEPENDENCY_KINDS",
    "SCOPE_MARKER",
    "scope_of",
    "unscoped_name",
    "Manifest",
    "PackageLocation",
    "PackageMatch",
    "ConsumerPackage",
    "SymlinkState",
    "SlotInspection",
    "ReconcileResult",
    "CompatibilityVerdict",
    "LinkedDependency",
    "PackageLinkStatus",
    "LinkSummary",
    "ProblematicDependency",
]
