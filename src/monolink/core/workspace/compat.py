"""Compatibility checks between linked versions and declared ranges.

Plain caret ranges (``^X.Y`` or ``^X.Y.Z``) are handled more strictly than
npm does: the linked version must share the range's major *and* minor.
Prereleases of that line are accepted. Every other range form, including
``^X`` and ``^X.x``, uses npm semantics against the linked version with its
prerelease tag stripped. ``||`` alternatives are checked one by one.
"""
from __future__ import annotations

import logging
import re
from typing import Mapping

from semantic_version import NpmSpec, Version

from .models import CompatibilityVerdict, Manifest

logger = logging.getLogger(__name__)

_CARET_RANGE = re.compile(r"^\^\s*(\d+)\.(\d+)(?:\.\d+)?(?:-[0-9A-Za-z.-]+)?$")


def _branch_matches(linked: Version, branch: str) -> bool:
    caret = _CARET_RANGE.match(branch)
    if caret is not None:
        return linked.major == int(caret.group(1)) and linked.minor == int(caret.group(2))
    return NpmSpec(branch).match(linked.truncate("patch"))


def is_compatible(linked_version: str, declared_range: str) -> bool:
    """Return True when ``linked_version`` may stand in for ``declared_range``.

    >>> is_compatible("4.4.53-dev.0", "^4.4")
    True
    >>> is_compatible("4.5.3", "^4.4")
    False
    >>> is_compatible("5.0.1", "^4.4 || ^5.0")
    True
    """
    try:
        linked = Version(linked_version.strip())
        branches = [b.strip() for b in declared_range.split("||")]
        return any(_branch_matches(linked, branch) for branch in branches)
    except ValueError as exc:
        logger.debug("Cannot compare %r against %r: %s", linked_version, declared_range, exc)
        return False


def check_linked_dependencies(
    manifest: Manifest,
    linked_versions: Mapping[str, str],
) -> list[CompatibilityVerdict]:
    """One verdict per declared dependency that is currently linked."""
    verdicts: list[CompatibilityVerdict] = []
    for name, declared in manifest.all_dependencies().items():
        if name not in linked_versions:
            continue
        linked = linked_versions[name]
        verdicts.append(
            CompatibilityVerdict(
                dependency=name,
                linked_version=linked,
                declared_range=declared,
                compatible=is_compatible(linked, declared),
            )
        )
    return verdicts


def find_compatibility_problems(
    manifest: Manifest,
    linked_versions: Mapping[str, str],
) -> set[str]:
    """Names of linked dependencies whose version violates the declared range."""
    return {v.dependency for v in check_linked_dependencies(manifest, linked_versions) if not v.compatible}


__all__ = ["check_linked_dependencies", "find_compatibility_problems", "is_compatible"]
