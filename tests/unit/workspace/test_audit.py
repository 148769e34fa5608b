"""Tests for problematic dependency detection."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.workspace import write_manifest


class TestClassifyDependencyValue:
    """Test classify_dependency_value."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            ("file:../core", "file:"),
            ("link:../core", "link:"),
            ("../core", "relative-path"),
            ("./vendor/core", "relative-path"),
            ("/abs/core", "relative-path"),
            ("workspace:*", "workspace"),
        ],
    )
    def test_local_values_are_flagged(self, value: str, kind: str) -> None:
        """Each local-only form is reported with its kind."""
        from monolink.core.workspace.audit import classify_dependency_value

        result = classify_dependency_value(value)

        assert result is not None
        assert result[0] == kind

    @pytest.mark.parametrize("value", ["^1.2.3", "~1.0", "latest", "npm:other@1.0.0"])
    def test_registry_values_pass(self, value: str) -> None:
        """Ordinary registry ranges are fine."""
        from monolink.core.workspace.audit import classify_dependency_value

        assert classify_dependency_value(value) is None


class TestScanForProblematicDependencies:
    """Test scan_for_problematic_dependencies over scanned packages."""

    def test_reports_dependencies_workspaces_and_overrides(self, tmp_path: Path) -> None:
        """Dependency maps, workspaces, overrides and resolutions are all audited."""
        from monolink.core.workspace import TreeScanner, scan_for_problematic_dependencies

        write_manifest(
            tmp_path / "app",
            "@acme/app",
            dependencies={"@acme/core": "file:../core", "lodash": "^4.17.0"},
            devDependencies={"@acme/test": "workspace:^"},
            workspaces=["packages/*"],
            overrides={"@acme/core": "link:../core", "react": "18.2.0"},
            resolutions={"@acme/utils": "../utils"},
        )
        write_manifest(tmp_path / "clean", "@acme/clean", dependencies={"@acme/core": "^1.0"})

        problems = scan_for_problematic_dependencies(TreeScanner().scan([tmp_path]))

        found = {(p.field, p.dependency, p.kind) for p in problems}
        assert found == {
            ("dependencies", "@acme/core", "file:"),
            ("devDependencies", "@acme/test", "workspace"),
            ("workspaces", "workspaces", "workspace"),
            ("overrides", "@acme/core", "override"),
            ("resolutions", "@acme/utils", "resolution"),
        }
        assert all(p.package == "@acme/app" for p in problems)

    def test_clean_tree_has_no_problems(self, tmp_path: Path) -> None:
        """Registry-only manifests yield an empty report."""
        from monolink.core.workspace import TreeScanner, scan_for_problematic_dependencies

        write_manifest(tmp_path / "a", "@acme/a", dependencies={"@acme/b": "^1.0"})

        assert scan_for_problematic_dependencies(TreeScanner().scan([tmp_path])) == []
