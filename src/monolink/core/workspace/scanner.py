"""Tree scanner: finds package manifests beneath one or more roots."""
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from .exceptions import ManifestParseError
from .manifest import MANIFEST_FILENAME, ManifestStore
from .models import PackageLocation

logger = logging.getLogger(__name__)

EXCLUDED_DIRECTORIES = frozenset(
    {
        "node_modules",
        "dist",
        "build",
        "coverage",
        ".git",
        ".next",
        ".nuxt",
        "out",
        "public",
        "static",
        "assets",
    }
)

# The root is depth 0; directories at this depth are read but not descended.
MAX_SCAN_DEPTH = 5


class TreeScanner:
    """Collects ``PackageLocation`` entries under directory roots.

    Each root is scanned independently on a bounded thread pool and the
    per-root results are concatenated in the order the roots were given.
    Duplicates from overlapping roots are kept.
    """

    def __init__(
        self,
        manifest_store: ManifestStore | None = None,
        *,
        max_depth: int = MAX_SCAN_DEPTH,
        max_workers: int = 4,
    ) -> None:
        self.manifest_store = manifest_store or ManifestStore()
        self.max_depth = max_depth
        self.max_workers = max(1, max_workers)

    def scan(self, roots: Iterable[Path]) -> list[PackageLocation]:
        root_list = [Path(r) for r in roots]
        if not root_list:
            return []
        if len(root_list) == 1:
            return self.scan_root(root_list[0])

        workers = min(self.max_workers, len(root_list))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="monolink-scan") as pool:
            per_root = list(pool.map(self.scan_root, root_list))

        locations: list[PackageLocation] = []
        for found in per_root:
            locations.extend(found)
        return locations

    def scan_root(self, root: Path) -> list[PackageLocation]:
        root = Path(root).resolve()
        if not root.is_dir():
            logger.debug("Skipping scan root %s: not a directory", root)
            return []

        locations: list[PackageLocation] = []
        self._walk(root, root, 0, locations)
        logger.debug("Found %d manifest(s) under %s", len(locations), root)
        return locations

    def _walk(self, root: Path, directory: Path, depth: int, out: list[PackageLocation]) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            logger.debug("Skipping unreadable directory %s: %s", directory, exc)
            return

        subdirectories: list[Path] = []
        for entry in entries:
            if entry.name == MANIFEST_FILENAME and entry.is_file(follow_symlinks=False):
                self._collect(root, directory, Path(entry.path), out)
            elif entry.name not in EXCLUDED_DIRECTORIES and entry.is_dir(follow_symlinks=False):
                subdirectories.append(Path(entry.path))

        if depth >= self.max_depth:
            return
        for sub in subdirectories:
            self._walk(root, sub, depth + 1, out)

    def _collect(self, root: Path, directory: Path, manifest_path: Path, out: list[PackageLocation]) -> None:
        try:
            manifest = self.manifest_store.read(manifest_path)
        except ManifestParseError as exc:
            logger.warning("Skipping %s", exc)
            return
        out.append(
            PackageLocation(
                manifest_path=manifest_path,
                directory=directory,
                relative_path=directory.relative_to(root),
                manifest=manifest,
            )
        )


__all__ = ["EXCLUDED_DIRECTORIES", "MAX_SCAN_DEPTH", "TreeScanner"]
