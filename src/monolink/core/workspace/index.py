"""Package index: scope and consumer queries over scan results.

There is no persistent dependency graph; each query rescans its roots.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence, TypeVar

from .models import ConsumerPackage, PackageLocation, PackageMatch
from .scanner import TreeScanner

logger = logging.getLogger(__name__)

_Named = TypeVar("_Named", PackageMatch, ConsumerPackage)


def sorted_by_name(items: Iterable[_Named]) -> list[_Named]:
    """Return ``items`` ordered by package name, then path."""
    return sorted(items, key=lambda item: (item.name, str(item.path)))


def matches_scope(name: str, scope: str) -> bool:
    return name.startswith(f"{scope.rstrip('/')}/")


class PackageIndex:
    def __init__(self, scanner: TreeScanner | None = None) -> None:
        self.scanner = scanner or TreeScanner()

    def locations(self, roots: Sequence[Path]) -> list[PackageLocation]:
        return self.scanner.scan(roots)

    def find_by_scope(
        self,
        roots: Sequence[Path],
        scope: str,
        exact_name: str | None = None,
    ) -> list[PackageMatch]:
        """Packages named ``<scope>/...`` (or exactly ``exact_name``).

        Unnamed manifests are scanned but never matched. With ``exact_name``
        only that package is returned, flagged as the source match.
        """
        matches: list[PackageMatch] = []
        for location in self.locations(roots):
            name = location.name
            if not name:
                continue
            if exact_name is not None:
                if name == exact_name:
                    matches.append(PackageMatch(name=name, path=location.directory, is_source_match=True))
            elif matches_scope(name, scope):
                matches.append(PackageMatch(name=name, path=location.directory, is_source_match=False))
        logger.debug("Scope query %s (exact=%s): %d match(es)", scope, exact_name, len(matches))
        return matches

    def find_consumers(self, roots: Sequence[Path], target_name: str) -> list[ConsumerPackage]:
        """Packages declaring ``target_name`` in any dependency map, once each."""
        consumers: list[ConsumerPackage] = []
        for location in self.locations(roots):
            manifest = location.manifest
            if manifest.name == target_name:
                continue
            kinds = manifest.dependency_kinds(target_name)
            if not kinds:
                continue
            consumers.append(
                ConsumerPackage(
                    name=manifest.name or str(location.relative_path),
                    path=location.directory,
                    dependency_kinds=tuple(kinds),
                )
            )
        return consumers


__all__ = ["PackageIndex", "matches_scope", "sorted_by_name"]
