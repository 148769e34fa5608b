"""Workspace linking engine.

Discovers packages in a directory tree, links sibling packages into each
other's ``node_modules`` and reports link status and version compatibility:
- scanner/manifest/index: package discovery and queries
- package_manager/registry: the host package manager and its global links
- reconciler: idempotent dependency-slot symlinks
- compat: linked-version compatibility rules
- orchestrator: the self-link, targeted link, unlink and status workflows
"""
from __future__ import annotations

from .audit import scan_for_problematic_dependencies
from .compat import check_linked_dependencies, find_compatibility_problems, is_compatible
from .exceptions import (
    ConsumerLinkError,
    LinkArgumentError,
    ManifestNotFoundError,
    ManifestParseError,
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
    CompatibilityVerdict,
    ConsumerPackage,
    LinkSummary,
    Manifest,
    PackageLinkStatus,
    PackageLocation,
    PackageMatch,
    ReconcileResult,
    SymlinkState,
)
from .orchestrator import LinkOrchestrator
from .overrides import WorkspaceOverrides
from .package_manager import PackageManager
from .reconciler import SymlinkReconciler, dependency_slot
from .registry import LinkRegistryReader
from .scanner import TreeScanner

__all__ = [
    "CompatibilityVerdict",
    "ConsumerLinkError",
    "ConsumerPackage",
    "LinkArgumentError",
    "LinkOrchestrator",
    "LinkRegistryReader",
    "LinkSummary",
    "Manifest",
    "ManifestNotFoundError",
    "ManifestParseError",
    "ManifestStore",
    "MissingPackageNameError",
    "PackageIndex",
    "PackageLinkStatus",
    "PackageLocation",
    "PackageManager",
    "PackageManagerError",
    "PackageMatch",
    "ReconcileResult",
    "SelfLinkError",
    "SourceLinkError",
    "SymlinkReconciler",
    "SymlinkState",
    "TreeScanner",
    "WorkspaceError",
    "WorkspaceFileError",
    "WorkspaceOverrides",
    "check_linked_dependencies",
    "dependency_slot",
    "find_compatibility_problems",
    "is_compatible",
    "scan_for_problematic_dependencies",
]
