"""Tests for linked-version compatibility rules."""
from __future__ import annotations

import pytest


class TestIsCompatible:
    """Test is_compatible."""

    @pytest.mark.parametrize(
        ("linked", "declared", "expected"),
        [
            ("4.4.53-dev.0", "^4.4", True),
            ("4.5.3", "^4.4", False),
            ("4.4.1", "^4.4", True),
            ("4.4.0", "^4.4.7", True),
            ("5.4.0", "^4.4", False),
            ("0.3.9", "^0.3.1", True),
        ],
    )
    def test_caret_requires_same_major_and_minor(self, linked: str, declared: str, expected: bool) -> None:
        """Caret ranges pin major and minor; patch and prerelease are free."""
        from monolink.core.workspace import is_compatible

        assert is_compatible(linked, declared) is expected

    @pytest.mark.parametrize(
        ("linked", "declared", "expected"),
        [
            ("1.2.9", "~1.2.0", True),
            ("1.3.0", "~1.2.0", False),
            ("1.2.4-beta.1", "~1.2.0", True),
            ("2.0.0-rc.1", ">=1.0.0 <2.0.0", False),
            ("1.5.0", ">=1.0.0 <2.0.0", True),
            ("1.2.3", "1.2.3", True),
            ("3.1.0", "*", True),
            ("4.4.1", "^4.x", True),
            ("4.5.0", "^4", True),
            ("5.0.0", "^4", False),
            ("4.9.2-rc.1", "^4.x", True),
        ],
    )
    def test_other_ranges_use_npm_semantics(self, linked: str, declared: str, expected: bool) -> None:
        """Non-caret ranges compare the linked version without its prerelease tag."""
        from monolink.core.workspace import is_compatible

        assert is_compatible(linked, declared) is expected

    @pytest.mark.parametrize(
        ("linked", "declared"),
        [("not-a-version", "^1.0"), ("1.0.0", "workspace:*"), ("1.0.0", "file:../core"), ("1.0.0", "^banana")],
    )
    def test_unparseable_input_is_incompatible(self, linked: str, declared: str) -> None:
        """Anything that cannot be parsed is reported incompatible rather than raising."""
        from monolink.core.workspace import is_compatible

        assert is_compatible(linked, declared) is False

    @pytest.mark.parametrize(
        ("linked", "declared", "expected"),
        [
            ("5.0.1", "^4.4 || ^5.0", True),
            ("4.4.7", "^4.4 || ^5.0", True),
            ("4.5.0", "^4.4 || ^5.0", False),
            ("5.1.0-dev.2", "^4.4 || ^5.1", True),
            ("2.3.0", "~1.2.0 || >=2.0.0 <3.0.0", True),
        ],
    )
    def test_alternatives_match_when_any_branch_does(self, linked: str, declared: str, expected: bool) -> None:
        """Each || alternative is checked on its own, with plain carets kept strict."""
        from monolink.core.workspace import is_compatible

        assert is_compatible(linked, declared) is expected


class TestFindCompatibilityProblems:
    """Test the manifest-level helpers."""

    def test_only_linked_incompatible_dependencies_are_reported(self) -> None:
        """Unlinked dependencies are never reported."""
        from monolink.core.workspace import Manifest, find_compatibility_problems

        manifest = Manifest(
            name="@acme/app",
            dependencies={"@acme/core": "^4.4", "@acme/utils": "^1.0", "lodash": "^4.17"},
            devDependencies={"@acme/test": "~2.0.0"},
        )

        problems = find_compatibility_problems(
            manifest, {"@acme/core": "4.5.3", "@acme/utils": "1.0.9", "@acme/test": "2.1.0"}
        )

        assert problems == {"@acme/core", "@acme/test"}

    def test_verdicts_carry_versions(self) -> None:
        """Each verdict records both sides of the comparison."""
        from monolink.core.workspace import Manifest, check_linked_dependencies

        manifest = Manifest(name="@acme/app", dependencies={"@acme/core": "^4.4"})

        (verdict,) = check_linked_dependencies(manifest, {"@acme/core": "4.4.53-dev.0"})

        assert verdict.to_dict() == {
            "dependency": "@acme/core",
            "linkedVersion": "4.4.53-dev.0",
            "declaredRange": "^4.4",
            "compatible": True,
        }
