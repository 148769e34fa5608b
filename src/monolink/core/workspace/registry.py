"""Link registry reader: what is globally linked right now."""
from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import PackageManagerError, WorkspaceError
from .manifest import ManifestStore
from .package_manager import PackageManager

logger = logging.getLogger(__name__)


class LinkRegistryReader:
    def __init__(self, package_manager: PackageManager, manifest_store: ManifestStore | None = None) -> None:
        self.package_manager = package_manager
        self.manifest_store = manifest_store or ManifestStore()

    def list_global_links(self) -> dict[str, Path]:
        """Map each globally linked package name to its source directory.

        The name comes from each directory's manifest, not its folder name.
        A failed query yields an empty mapping.
        """
        try:
            directories = self.package_manager.list_global_links()
        except (PackageManagerError, OSError) as exc:
            logger.debug("Global link query failed: %s", exc)
            return {}

        links: dict[str, Path] = {}
        for directory in directories:
            try:
                manifest = self.manifest_store.read_directory(directory)
            except WorkspaceError as exc:
                logger.debug("Ignoring global link %s: %s", directory, exc)
                continue
            if manifest.name:
                links[manifest.name] = directory
        logger.debug("Found %d globally linked package(s)", len(links))
        return links


__all__ = ["LinkRegistryReader"]
